"""Clinic application: doctors, patients, appointments and accounts.

Models, serializers, services and function views backing the hospital
administration API.
"""
