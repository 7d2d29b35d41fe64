"""Absence Registry package.

Feature modules (users, records, reports) each carry a model, a repository
interface with its MySQL implementation, a service and a thin Flask
controller.
"""
