# historiales/management/commands/ensure_staff_user.py
from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.hashers import make_password
from historiales.models import User


class Command(BaseCommand):
    help = "Create or reset a staff account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--password", required=True)
        parser.add_argument("--role", choices=[r for r, _ in User.ROLE_CHOICES], default="medico")

    def handle(self, *args, **opts):
        username = (opts["username"] or "").strip()
        if not username:
            raise CommandError("username is required")
        role = opts["role"]
        u, created = User.objects.get_or_create(
            username=username,
            defaults={"role": role, "password": make_password(opts["password"]), "is_active": True},
        )
        if not created:
            # reset password, role and active flag
            u.password = make_password(opts["password"])
            u.role = role
            u.is_active = True
            u.save(update_fields=["password", "role", "is_active"])
        action = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"{action}: {username} ({role})"))
