from decimal import Decimal

from django.core.management.base import BaseCommand

from portal.models import Plan

PLANS = [
    {
        'slug': 'skilled', 'title': 'Skilled', 'price': Decimal('350'),
        'interview_credits_granted': 5, 'contact_unlock_credits_granted': 1,
        'basic_filters': True, 'nationality_restriction': Plan.NATIONALITY_NONE,
    },
    {
        'slug': 'specialty', 'title': 'Specialty', 'price': Decimal('450'),
        'interview_credits_granted': 5, 'contact_unlock_credits_granted': 1,
        'basic_filters': True, 'nationality_restriction': Plan.NATIONALITY_NONE,
    },
    {
        'slug': 'elite-specialty', 'title': 'Elite Specialty', 'price': Decimal('600'),
        'interview_credits_granted': 5, 'contact_unlock_credits_granted': 1,
        'basic_filters': True, 'nationality_restriction': Plan.NATIONALITY_NONE,
    },
    {
        'slug': 'top-picks', 'title': 'Top Picks', 'price': Decimal('700'),
        'interview_credits_granted': 5, 'contact_unlock_credits_granted': 1,
        'basic_filters': True, 'nationality_restriction': Plan.NATIONALITY_SAUDI,
    },
    {
        'slug': 'custom', 'title': 'Custom', 'price': Decimal('0'),
        'interview_credits_granted': 0, 'contact_unlock_credits_granted': 0,
        'basic_filters': False, 'nationality_restriction': Plan.NATIONALITY_NONE, 'is_custom': True,
    },
]


class Command(BaseCommand):
    help = 'Create or update the standard pricing plans (idempotent, keyed by slug).'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Print what would change without writing.'
        )

    def handle(self, *args, **options):
        dry_run = options.get('dry_run', False)
        created_count = updated_count = 0
        for spec in PLANS:
            defaults = {k: v for k, v in spec.items() if k != 'slug'}
            defaults.setdefault('is_custom', False)
            defaults.setdefault('currency', 'SAR')
            if dry_run:
                exists = Plan.objects.filter(slug=spec['slug']).exists()
                self.stdout.write(f"[dry-run] {'update' if exists else 'create'} plan '{spec['slug']}'")
                continue
            _, created = Plan.objects.update_or_create(slug=spec['slug'], defaults=defaults)
            if created:
                created_count += 1
            else:
                updated_count += 1

        if not dry_run:
            self.stdout.write(self.style.SUCCESS(
                f"Plans seeded: {created_count} created, {updated_count} updated."
            ))
