"""Concrete implementations of hipcall_sms protocols."""
