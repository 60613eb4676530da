"""Example: drive the billing services directly, without Flask.

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.hostel_mess.hostel_mess.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.attendance_service.get_attendance_ui("SNG25MCAanjali"))
    print(container.bill_notification_gate.peek_bill_flag("SNG25MCAanjali"))


if __name__ == "__main__":
    main()
