"""Gym check-in package.

Organized by feature modules (roster, checkins, logs, gesture, auth) with a thin
Flask controller layer on top of service/repository layers.
"""
