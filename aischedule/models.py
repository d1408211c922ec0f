from datetime import date

from django.db import models


class Role(models.Model):
    name = models.CharField(max_length=50, unique=True)
    color = models.CharField(max_length=7, blank=True, help_text="Display color in #RRGGBB format")

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name


class UserQuerySet(models.QuerySet):

    def active_without_absence_in_range(self, start_date: date, end_date: date):
        """Active users without an approved absence overlapping ``[start_date, end_date]``."""
        absent = Absence.objects.filter(
            status=Absence.Status.APPROVED,
            start__lte=end_date,
            end__gte=start_date,
        ).values('user_id')
        return (
            self.filter(is_active=True)
            .exclude(id__in=absent)
            .prefetch_related('roles')
            .order_by('id')
        )


class User(models.Model):
    firstname = models.CharField(max_length=50)
    surname = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    employee_id = models.CharField(max_length=20, unique=True, db_index=True)
    is_active = models.BooleanField(default=True)
    roles = models.ManyToManyField(Role, related_name='users', blank=True)

    objects = UserQuerySet.as_manager()

    def __str__(self):
        return f"{self.firstname} {self.surname} ({self.employee_id})"


class Absence(models.Model):

    class Status(models.TextChoices):
        AWAITING = 'awaiting', 'Awaiting'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'
        CANCELLED = 'cancelled', 'Cancelled'

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='absences')
    start = models.DateField()
    end = models.DateField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AWAITING, db_index=True)

    def __str__(self):
        return f"{self.user} {self.start} - {self.end} ({self.status})"


class PredefineShift(models.Model):
    """Reusable shift time template, e.g. 06:00-14:00."""
    name = models.CharField(max_length=50, unique=True)
    start = models.TimeField()
    end = models.TimeField()

    class Meta:
        ordering = ['start']

    def crosses_midnight(self) -> bool:
        return self.end < self.start

    def __str__(self):
        return f"{self.name} ({self.start:%H:%M}-{self.end:%H:%M})"


class Shift(models.Model):
    start = models.DateTimeField(db_index=True)
    end = models.DateTimeField()
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='shifts')
    role = models.ForeignKey(Role, on_delete=models.SET_NULL, null=True, blank=True, related_name='shifts')
    published = models.BooleanField(default=False)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'start']),
        ]

    def __str__(self):
        return f"{self.start:%Y-%m-%d %H:%M} - {self.user} - {self.role or 'No role'}"


class Notification(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    title = models.CharField(max_length=100)
    message = models.TextField()
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user} - {self.title}"
