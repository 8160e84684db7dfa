from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from reports.tasks import generate_team_summary_task
from teamdaily import celery_app  # noqa: F401  broker config from settings


class Command(BaseCommand):
    help = "生成指定日期（默认今天）的 AI 团队总结，适合每日定时执行。"

    def add_arguments(self, parser):
        parser.add_argument('--date', type=str, help='YYYY-MM-DD，默认今天')
        parser.add_argument('--async', action='store_true', dest='run_async', help='投递到 Celery 队列')

    def handle(self, *args, **options):
        date_str = options.get('date')
        if date_str:
            try:
                valid = parse_date(date_str)
            except ValueError:
                valid = None
            if not valid:
                raise CommandError(f"Invalid date: {date_str}")

        if options['run_async']:
            result = generate_team_summary_task.delay(date_str)
            self.stdout.write(self.style.SUCCESS(f"Queued summary task {result.id}"))
            return

        summary_id = generate_team_summary_task(date_str)
        if summary_id is None:
            self.stdout.write(self.style.WARNING("No reports for that date, nothing generated."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Team summary #{summary_id} generated."))
