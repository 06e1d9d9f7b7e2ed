from django.core.management.base import BaseCommand
from apps.promotions.services import PromotionRepository


class Command(BaseCommand):
    help = 'Deactivate promotions whose end date has passed (usage history is kept)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only report how many promotions would be deactivated',
        )

    def handle(self, *args, **options):
        if options.get('dry_run'):
            pending = PromotionRepository.expired_queryset().count()
            self.stdout.write(f'{pending} expired promotions would be deactivated')
            return

        deactivated = PromotionRepository.deactivate_expired()
        self.stdout.write(
            self.style.SUCCESS(f'Deactivated {deactivated} expired promotions')
        )
