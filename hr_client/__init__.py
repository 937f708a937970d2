"""HR client — async access to the HR backend: employee directory, leave workflow, dashboards."""

__version__ = "1.0.0"
