"""Clients for the collaborating services (restaurant, order, delivery, notification)."""
