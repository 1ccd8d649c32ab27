from rostercheck.schemas.models import Client, Config, Task, ValidationIssue, Worker

__all__ = ["Client", "Config", "Task", "ValidationIssue", "Worker"]
