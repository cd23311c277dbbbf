import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('reservations', '0001_initial'),
        ('tables', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DiningSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('party_identifier', models.CharField(blank=True, help_text='How staff refer to the party, e.g. the booking name.', max_length=255)),
                ('party_size', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('ACTIVE', 'Active'), ('BILLED', 'Billed'), ('CLOSED', 'Closed')], default='ACTIVE', max_length=10)),
                ('start_time', models.DateTimeField(default=django.utils.timezone.now)),
                ('end_time', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('opened_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='opened_sessions', to=settings.AUTH_USER_MODEL)),
                ('reservation', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='dining_session', to='reservations.reservation')),
                ('table', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='dining_sessions', to='tables.table')),
            ],
            options={
                'ordering': ['-start_time', '-id'],
                'indexes': [models.Index(fields=['status', 'table'], name='session_status_table_idx')],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status__in', ['ACTIVE', 'BILLED'])), fields=('table',), name='one_open_session_per_table'),
                    models.CheckConstraint(condition=models.Q(('party_size__gte', 1)), name='session_party_size_positive'),
                ],
            },
        ),
    ]
