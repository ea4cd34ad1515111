import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Goal',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('activity', models.CharField(max_length=100, verbose_name='Activity')),
                ('unit', models.CharField(max_length=50, verbose_name='Unit')),
                ('target_value', models.DecimalField(decimal_places=3, max_digits=10, verbose_name='Target value')),
                ('deadline_days', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(365)], verbose_name='Deadline (days)')),
                ('source', models.CharField(choices=[('manual', 'Manual'), ('ai', 'AI-generated')], default='manual', max_length=10, verbose_name='Source')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Completed')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='goals', to='core.user')),
            ],
            options={
                'db_table': 'fitness_goals',
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ProgressLog',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('value', models.DecimalField(decimal_places=3, max_digits=10, verbose_name='Value')),
                ('logged_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Logged')),
                ('goal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='progress_logs', to='goals.goal')),
            ],
            options={
                'db_table': 'progress_logs',
                'ordering': ['-logged_at', '-id'],
            },
        ),
        migrations.AddConstraint(
            model_name='goal',
            constraint=models.UniqueConstraint(fields=('user', 'activity', 'unit'), name='unique_goal_activity_unit_per_user'),
        ),
    ]
