from django.core.management.base import BaseCommand, CommandError

from accounts.models import AdminUser
from accounts.services import AdminUserService


class Command(BaseCommand):
    help = 'Create a back-office admin user'

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('password')
        parser.add_argument(
            '--role',
            choices=[AdminUser.ROLE_ADMIN, AdminUser.ROLE_SUPER_ADMIN],
            default=AdminUser.ROLE_SUPER_ADMIN,
        )

    def handle(self, *args, **options):
        username = options['username']
        if AdminUser.objects.filter(username=username).exists():
            raise CommandError(f'Admin user "{username}" already exists')

        user = AdminUserService.create(username, options['password'], role=options['role'])
        if user.is_super_admin:
            user.is_staff = True
            user.save(update_fields=['is_staff'])

        self.stdout.write(self.style.SUCCESS(f'Created {user}'))
