import decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserStats',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_points', models.PositiveIntegerField(default=0)),
                ('level', models.PositiveIntegerField(default=1)),
                ('streak_days', models.PositiveIntegerField(default=0)),
                ('last_activity_date', models.DateField(blank=True, null=True)),
                ('tasks_completed', models.PositiveIntegerField(default=0)),
                ('hours_logged', models.DecimalField(decimal_places=2, default=decimal.Decimal('0'), max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='gamification_stats', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'user stats',
                'indexes': [models.Index(fields=['-total_points'], name='userstats_points_idx')],
            },
        ),
        migrations.CreateModel(
            name='Achievement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('badge_type', models.CharField(choices=[('first_steps', 'First Steps'), ('early_bird', 'Early Bird'), ('night_owl', 'Night Owl'), ('speed_demon', 'Speed Demon'), ('marathon_runner', 'Marathon Runner'), ('team_player', 'Team Player'), ('profit_maker', 'Profit Maker'), ('on_time_hero', 'On Time Hero'), ('big_spender', 'Big Spender'), ('money_maker', 'Money Maker')], max_length=64)),
                ('badge_name', models.CharField(max_length=128)),
                ('badge_description', models.CharField(blank=True, max_length=255)),
                ('points', models.PositiveIntegerField()),
                ('earned_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='achievements', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [models.Index(fields=['user', '-earned_at'], name='achievement_user_earned_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'badge_type'), name='unique_user_badge')],
            },
        ),
    ]
