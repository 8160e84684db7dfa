import random
from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone
from faker import Faker
from tqdm import tqdm

from core.models import TeamGroup
from core.services.members import MemberError, create_member
from core.services.team_settings import ensure_default_groups, get_team_settings
from reports.services.daily import ReportValidationError, submit_daily_report
from reports.services.streaks import weekday_number

STATUSES = ['专注', '顺利', '忙碌', '卡住了', '摸鱼']
TAG_POOL = ['前端', '后端', '设计', '测试', '会议', '文档', '运维', '市场', '需求评审']


class Command(BaseCommand):
    help = 'Generates demo members and backdated daily reports (zh_CN) through the normal submission flow'

    def add_arguments(self, parser):
        parser.add_argument('--users', type=int, default=8, help='Number of members (default: 8)')
        parser.add_argument('--days', type=int, default=30, help='How many past days to cover (default: 30)')
        parser.add_argument('--rate', type=float, default=0.85, help='Chance a member reports on a work day')
        parser.add_argument('--password', type=str, default='password123')
        parser.add_argument('--seed', type=int, help='Random seed for reproducible data')

    def handle(self, *args, **options):
        fake = Faker('zh_CN')
        if options.get('seed') is not None:
            Faker.seed(options['seed'])
            random.seed(options['seed'])

        ensure_default_groups()
        group_ids = list(TeamGroup.objects.values_list('id', flat=True))

        self.stdout.write(f"Generating {options['users']} members...")
        User = get_user_model()
        members = []
        for i in range(options['users']):
            email = f"demo{i + 1}@example.com"
            existing = User.objects.filter(username=email).first()
            if existing:
                members.append(existing)
                continue
            try:
                members.append(create_member(
                    fake.name(), email, options['password'],
                    group_id=random.choice(group_ids) if group_ids else None,
                ))
            except MemberError as exc:
                self.stdout.write(self.style.WARNING(f"Skip {email}: {exc}"))

        work_days = set(get_team_settings()['work_days'])
        today = timezone.localdate()
        days = [today - timedelta(days=n) for n in range(options['days'] - 1, -1, -1)]

        # oldest day first so streaks build up in order
        created = skipped = 0
        for day in tqdm(days):
            if weekday_number(day) not in work_days:
                continue
            for user in members:
                if random.random() > options['rate']:
                    continue
                lines = [fake.sentence(nb_words=6) for _ in range(random.randint(1, 10))]
                try:
                    submit_daily_report(
                        user,
                        date=day,
                        status=random.choice(STATUSES),
                        today_work='\n'.join(lines),
                        problems=fake.sentence() if random.random() < 0.3 else '',
                        tomorrow_plan=fake.sentence(),
                        tags=random.sample(TAG_POOL, k=random.randint(1, 3)),
                    )
                except ReportValidationError:
                    # existing member already reported past this day
                    skipped += 1
                    continue
                created += 1

        self.stdout.write(self.style.SUCCESS(f"Done: {len(members)} members, {created} reports, {skipped} skipped."))
