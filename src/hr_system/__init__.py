"""HR System package.

Feature modules (employees, leaves, payroll) each keep a model, a repository
interface with its MySQL implementation, a service and a thin Flask
controller returning JSON.
"""
