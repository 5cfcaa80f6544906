from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model


class Command(BaseCommand):
    help = "Create or update an admin or moderator account with a specified username/password."

    def add_arguments(self, parser):
        parser.add_argument('--username', required=True, help='Username for the staff user')
        parser.add_argument('--password', required=True, help='Password for the staff user')
        parser.add_argument('--email', required=True, help='Email for the staff user')
        parser.add_argument('--role', default='admin', choices=['admin', 'moderator'], help='Role (default: admin)')
        parser.add_argument('--superuser', action='store_true', help='Also grant Django superuser status')
        parser.add_argument('--first-name', default='', help='First name (optional)')
        parser.add_argument('--last-name', default='', help='Last name (optional)')

    def handle(self, *args, **options):
        User = get_user_model()
        username = options['username']
        email = options['email'].strip().lower()
        role = options['role']
        first_name = options.get('first_name') or ''
        last_name = options.get('last_name') or ''

        clash = User.objects.filter(email=email).exclude(username=username).first()
        if clash:
            raise CommandError(f"Email '{email}' already belongs to user '{clash.username}'")

        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': email, 'role': role}
        )

        changed = []
        if user.email != email:
            user.email = email
            changed.append('email')
        if user.role != role:
            user.role = role
            changed.append('role')
        if first_name and user.first_name != first_name:
            user.first_name = first_name
            changed.append('first_name')
        if last_name and user.last_name != last_name:
            user.last_name = last_name
            changed.append('last_name')
        if options['superuser'] and not user.is_superuser:
            user.is_superuser = True
            changed.append('is_superuser')
        if not user.is_active:
            user.is_active = True
            changed.append('is_active')

        user.set_password(options['password'])
        user.save()

        verb = 'created' if created else 'updated'
        self.stdout.write(self.style.SUCCESS(
            f"{role.capitalize()} user {verb}: username='{username}' email='{user.email}' cms_access={user.is_staff}"
        ))
        if changed:
            self.stdout.write(self.style.SUCCESS(f"Fields ensured: {', '.join(changed)}."))
        else:
            self.stdout.write("No field changes were necessary.")
