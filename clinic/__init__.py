"""
Clinic Management System

A FastAPI-based backend for running a clinic: patients, doctors, weekly
doctor schedules and appointments, with role-based access for admins,
doctors and receptionists.
"""

__version__ = "1.0.0"
