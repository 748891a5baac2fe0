"""daylist: a local, single-user task list organised by calendar day."""

__version__ = "0.1.0"
