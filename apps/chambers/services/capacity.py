# apps/chambers/services/capacity.py
from datetime import datetime, date, timedelta


def compute_max_slots(window):
    """
    Number of bookable slots in one session.
    0 means the chamber configuration is unusable.
    """
    if not window.slot_duration or window.slot_duration <= 0:
        return 0
    return window.duration_minutes // window.slot_duration


def slot_times(window):
    """Wall-clock (start, end) of every slot, numbered from 1"""
    slots = []
    max_slots = compute_max_slots(window)
    if max_slots == 0:
        return slots

    start = datetime.combine(date.min, window.start_time)
    step = timedelta(minutes=window.slot_duration)

    for _ in range(max_slots):
        slots.append((start.time(), (start + step).time()))
        start += step

    return slots
