"""Valet Booking API - valets, rotas, slot availability and bookings"""
