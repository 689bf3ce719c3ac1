from .chamber import ChamberViewSet
