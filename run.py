#!/usr/bin/env python3
"""Entry point for running the reminders front end."""

from reminders_handler.app import main

if __name__ == "__main__":
    main()
