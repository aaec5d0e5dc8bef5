"""Action handlers extracted from the CurationDashboard app.

Each module groups handlers for one concern; they take the app as their
first argument and are called from thin delegating methods on the app.
"""
