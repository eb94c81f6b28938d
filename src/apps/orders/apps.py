"""Orders app configuration."""

import atexit

from django.apps import AppConfig, apps


class OrdersConfig(AppConfig):
    """Owns the background task runner used for order side effects."""

    name = "apps.orders"
    label = "orders"
    verbose_name = "Orders"

    task_runner = None

    def ready(self) -> None:
        from .tasks import TaskRunner

        self.task_runner = TaskRunner.from_settings()
        atexit.register(self.task_runner.shutdown)


def get_task_runner():
    """Return the task runner created at startup."""
    return apps.get_app_config("orders").task_runner
