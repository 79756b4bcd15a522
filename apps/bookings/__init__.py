"""Bookings app package.

This app encapsulates the booking domain: the booking aggregate and its
approval workflow, the booking store, and the state-filtered queries
used by bookers and item owners. Status changes are compare-and-set
updates, and approved bookings of one item never overlap while overlap
prevention is enabled.
"""
