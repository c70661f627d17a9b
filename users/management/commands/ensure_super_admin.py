import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from users.enums import UserRole

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Create the super admin account, or promote it if it already exists."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=None, help="Defaults to SUPER_ADMIN_USERNAME")
        parser.add_argument("--password", default=None, help="Defaults to SUPER_ADMIN_PASSWORD")

    def handle(self, *args, **options):
        User = get_user_model()
        username = options["username"] or settings.SUPER_ADMIN_USERNAME
        password = options["password"] or settings.SUPER_ADMIN_PASSWORD

        user = User.objects.filter(username=username).first()
        if user is None:
            if not password:
                raise CommandError(
                    "SUPER_ADMIN_PASSWORD is not set; cannot create %s" % username
                )
            User.objects.create_user(username=username, password=password, role=UserRole.SUPER_ADMIN)
            logger.info("Created super admin %s", username)
            self.stdout.write(self.style.SUCCESS(f"Created super admin '{username}'"))
            return

        if user.role != UserRole.SUPER_ADMIN:
            user.role = UserRole.SUPER_ADMIN
            user.save(update_fields=["role", "updated_at"])
            logger.info("Promoted %s to super admin", username)
            self.stdout.write(self.style.SUCCESS(f"Promoted '{username}' to super admin"))
        else:
            self.stdout.write(f"Super admin '{username}' already exists")
