from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from modules.core.container import build_container
from modules.core.seed import seed_demo_users


class Command(BaseCommand):
    help = "Register the demo accounts and write them to the snapshot file."

    def handle(self, *args, **options):
        if not settings.SNAPSHOT_PATH:
            raise CommandError("SNAPSHOT_PATH is not set; nothing would be persisted.")

        container = build_container(
            snapshot_path=settings.SNAPSHOT_PATH,
            due_days=settings.INVOICE_DUE_DAYS,
        )
        container.start(seed_demo_data=False)
        self.stdout.write("Seeding demo accounts...")
        created = seed_demo_users(container.accounts)
        container.flush()

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: users_created={created}, "
                f"users_total={container.state.counts()['users']}"
            )
        )
