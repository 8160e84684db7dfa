from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TeamSummary',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(unique=True, verbose_name='日期')),
                ('summary', models.TextField(blank=True, verbose_name='团队总结')),
                ('risks', models.TextField(blank=True, verbose_name='主要风险')),
                ('recommendations', models.TextField(blank=True, verbose_name='改进建议')),
                ('keywords', models.JSONField(blank=True, default=list, verbose_name='关键词')),
                ('report_count', models.PositiveIntegerField(default=0, verbose_name='日报数量')),
                ('created_at', models.DateTimeField(auto_now=True, verbose_name='生成时间')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='team_summaries', to=settings.AUTH_USER_MODEL, verbose_name='生成人')),
            ],
            options={
                'verbose_name': '团队总结',
                'verbose_name_plural': '团队总结',
                'ordering': ['-date'],
            },
        ),
    ]
