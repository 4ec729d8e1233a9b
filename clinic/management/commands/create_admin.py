# clinic/management/commands/create_admin.py
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from clinic.models import User, normalize_email


class Command(BaseCommand):
    help = "Ensure an admin account exists (idempotent). Defaults come from ADMIN_EMAIL/ADMIN_PASSWORD/ADMIN_NAME."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None)
        parser.add_argument("--password", default=None)
        parser.add_argument("--name", default=None)

    def handle(self, *args, **opts):
        email = normalize_email(opts["email"] or settings.ADMIN_EMAIL)
        password = opts["password"] or settings.ADMIN_PASSWORD
        name = opts["name"] or settings.ADMIN_NAME
        if not email:
            raise CommandError("An email is required (--email or ADMIN_EMAIL).")

        if User.objects.filter(email=email).exists():
            self.stdout.write(self.style.WARNING(f"Admin user already exists: {email}"))
            return
        if not password or len(password) < 6:
            raise CommandError("A password of at least 6 characters is required (--password or ADMIN_PASSWORD).")

        User.objects.create_superuser(email=email, password=password, name=name)
        self.stdout.write(self.style.SUCCESS(f"Admin user created: {email}"))
