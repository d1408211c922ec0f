from django.contrib import admin
from .models import Absence, Notification, PredefineShift, Role, Shift, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('employee_id', 'firstname', 'surname', 'email', 'is_active')
    list_filter = ('is_active', 'roles')
    search_fields = ('employee_id', 'firstname', 'surname', 'email')
    filter_horizontal = ('roles',)


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = ('start', 'end', 'user', 'role', 'published')
    list_filter = ('published', 'role')
    date_hierarchy = 'start'


@admin.register(Absence)
class AbsenceAdmin(admin.ModelAdmin):
    list_display = ('user', 'start', 'end', 'status')
    list_filter = ('status',)


@admin.register(PredefineShift)
class PredefineShiftAdmin(admin.ModelAdmin):
    list_display = ('name', 'start', 'end')


admin.site.register(Role)
admin.site.register(Notification)
