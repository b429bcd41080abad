"""Bookings Domain - create (capacity checked), list, complete and delete bookings"""
