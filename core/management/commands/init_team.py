from django.core.management.base import BaseCommand

from core.constants import WEEKDAY_LABELS
from core.services.team_settings import ensure_default_groups, get_team_settings, update_team_settings


class Command(BaseCommand):
    help = "初始化团队：创建默认小组，并写入团队名称 / 工作日 / 成就规则的默认配置（已有配置保持不变）。"

    def add_arguments(self, parser):
        parser.add_argument('--team-name', type=str, help='覆盖团队名称')

    def handle(self, *args, **options):
        created = ensure_default_groups()
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created groups: {', '.join(g.name for g in created)}"))
        else:
            self.stdout.write("Groups already exist, skipped.")

        payload = dict(get_team_settings())
        if options.get('team_name'):
            payload['team_name'] = options['team_name']
        current = update_team_settings(payload, changed_by='init_team')

        days = ' '.join(WEEKDAY_LABELS[d] for d in current['work_days']) or '-'
        self.stdout.write(self.style.SUCCESS(
            f"Team '{current['team_name']}' ready. Work days: {days}. "
            f"Rules: {current['achievement_rules']}"
        ))
