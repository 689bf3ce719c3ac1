# core/constants.py

from django.db import models


class UserRoles:
    """User role constants for RBAC"""
    ADMIN = 'ADMIN'
    OFFICE_MANAGER = 'OFFICE_MANAGER'
    DOCTOR = 'DOCTOR'
    PHARMACY = 'PHARMACY'
    PATIENT = 'PATIENT'

    CHOICES = [
        (ADMIN, 'Administrator'),
        (OFFICE_MANAGER, 'Office Manager'),
        (DOCTOR, 'Doctor'),
        (PHARMACY, 'Pharmacy'),
        (PATIENT, 'Patient'),
    ]

    MANAGERS = [ADMIN, OFFICE_MANAGER]


class ScheduleType(models.TextChoices):
    WEEKLY_RECURRING = 'WEEKLY_RECURRING', 'Weekly Recurring'
    MULTI_WEEKLY = 'MULTI_WEEKLY', 'Multi-Weekly'
    MONTHLY_SPECIFIC = 'MONTHLY_SPECIFIC', 'Monthly Specific'

    @classmethod
    def recurring(cls):
        return (cls.WEEKLY_RECURRING, cls.MULTI_WEEKLY)


class WeekDay(models.TextChoices):
    MONDAY = 'MONDAY', 'Monday'
    TUESDAY = 'TUESDAY', 'Tuesday'
    WEDNESDAY = 'WEDNESDAY', 'Wednesday'
    THURSDAY = 'THURSDAY', 'Thursday'
    FRIDAY = 'FRIDAY', 'Friday'
    SATURDAY = 'SATURDAY', 'Saturday'
    SUNDAY = 'SUNDAY', 'Sunday'

    @property
    def python_weekday(self):
        """Same numbering as date.weekday(): Monday == 0"""
        return list(WeekDay).index(self)


class WeekNumber(models.TextChoices):
    FIRST = 'FIRST', '1st'
    SECOND = 'SECOND', '2nd'
    THIRD = 'THIRD', '3rd'
    FOURTH = 'FOURTH', '4th'
    LAST = 'LAST', 'Last'

    @property
    def ordinal(self):
        """1..4 for FIRST..FOURTH, None for LAST"""
        if self == WeekNumber.LAST:
            return None
        return list(WeekNumber).index(self) + 1


class SlotDuration(models.IntegerChoices):
    MIN_15 = 15, '15 minutes'
    MIN_30 = 30, '30 minutes'
    MIN_45 = 45, '45 minutes'
    MIN_60 = 60, '60 minutes'


class AppointmentStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    CONFIRMED = 'CONFIRMED', 'Confirmed'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'
    NO_SHOW = 'NO_SHOW', 'No Show'

    @classmethod
    def occupying(cls):
        """Statuses that hold a slot"""
        return [cls.PENDING, cls.CONFIRMED]


class PaymentStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'
    REFUNDED = 'REFUNDED', 'Refunded'
