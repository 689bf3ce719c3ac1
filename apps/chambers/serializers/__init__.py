from .chamber import (
    ChamberSerializer,
    ChamberWriteSerializer,
    ChamberPreviewSerializer,
    ChamberVerifySerializer,
    SlotQuerySerializer,
    UpcomingDatesQuerySerializer,
)
