"""
Management command to create a back-office operator who can sign in.

Usage:
    python manage.py create_operator \\
        --email ops@example.com \\
        --first-name Dana \\
        --last-name Lee \\
        --password "SecureP@ss123"

The password is prompted for when omitted. Pass --staff to also grant access
to the Django admin.
"""
import getpass

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from users.models import User


class Command(BaseCommand):
    help = "Create an operator account for the Fleet Account Manager."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True, help="Login email")
        parser.add_argument("--password", required=False, help="Password (prompted if omitted)")
        parser.add_argument("--first-name", default="", help="First name")
        parser.add_argument("--last-name", default="", help="Last name")
        parser.add_argument("--staff", action="store_true", help="Allow Django admin access")

    def handle(self, *args, **options):
        email = options["email"].lower().strip()
        password = options.get("password")

        if User.objects.filter(email=email).exists():
            raise CommandError(f"User '{email}' already exists.")

        if not password:
            password = getpass.getpass("Enter password: ")
            confirm = getpass.getpass("Confirm password: ")
            if password != confirm:
                raise CommandError("Passwords do not match.")

        try:
            validate_password(password)
        except ValidationError as exc:
            raise CommandError(" ".join(exc.messages)) from exc

        User.objects.create_user(
            email=email,
            password=password,
            first_name=options["first_name"],
            last_name=options["last_name"],
            is_staff=options["staff"],
        )
        self.stdout.write(self.style.SUCCESS(f"Operator {email} created."))
