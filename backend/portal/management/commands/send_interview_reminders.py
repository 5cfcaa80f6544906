from django.core.management.base import BaseCommand

from portal.tasks import _send_interview_reminders_sync, send_interview_reminders_task


class Command(BaseCommand):
    help = 'Notify candidates and employers about approved interviews starting soon.'

    def add_arguments(self, parser):
        parser.add_argument('--hours', type=int, default=24, help='Look-ahead window in hours (default 24)')
        parser.add_argument('--async', dest='run_async', action='store_true', help='Queue on Celery instead of running inline')

    def handle(self, *args, **options):
        hours = options['hours']
        if options['run_async']:
            send_interview_reminders_task.delay(hours)
            self.stdout.write(self.style.SUCCESS(f"Queued interview reminders for the next {hours}h."))
            return
        sent = _send_interview_reminders_sync(hours)
        self.stdout.write(self.style.SUCCESS(f"Sent {sent} interview reminder(s)."))
