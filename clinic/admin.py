"""
Django admin registrations for the clinic models.

The ``/admin/`` site is a convenience for inspecting records during
development; the REST API remains the primary interface.
"""

from django.contrib import admin

from .models import Appointment, Doctor, Patient, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'role', 'is_active', 'is_staff')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'name')
    exclude = ('password',)


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialty', 'email', 'phone')
    list_filter = ('specialty',)
    search_fields = ('name', 'email')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'gender', 'status', 'email', 'phone')
    list_filter = ('status', 'gender')
    search_fields = ('name', 'email')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'date', 'time', 'doctor', 'patient', 'status')
    list_filter = ('status', 'date')
    search_fields = ('doctor__name', 'patient__name')
    raw_id_fields = ('doctor', 'patient')
