from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyReport',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(verbose_name='日期')),
                ('status', models.CharField(blank=True, max_length=50, verbose_name='今日状态')),
                ('today_work', models.TextField(verbose_name='今日工作')),
                ('problems', models.TextField(blank=True, verbose_name='遇到问题')),
                ('tomorrow_plan', models.TextField(blank=True, verbose_name='明日计划')),
                ('task_count', models.PositiveIntegerField(default=0, verbose_name='完成事项数')),
                ('tags', models.JSONField(blank=True, default=list, verbose_name='标签')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('group', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reports', to='core.teamgroup', verbose_name='提交时所属小组')),
                ('likes', models.ManyToManyField(blank=True, related_name='liked_reports', to=settings.AUTH_USER_MODEL, verbose_name='点赞')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_reports', to=settings.AUTH_USER_MODEL, verbose_name='用户')),
            ],
            options={
                'verbose_name': '日报',
                'verbose_name_plural': '日报',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='report_user_date_idx'),
                    models.Index(fields=['date'], name='report_date_idx'),
                    models.Index(fields=['group', 'date'], name='report_group_date_idx'),
                ],
            },
        ),
    ]
