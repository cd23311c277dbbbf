import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Table',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(help_text="Human readable table number, e.g. 'A1'.", max_length=20, unique=True)),
                ('capacity', models.PositiveIntegerField(help_text='Number of guests the table seats.', validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('AVAILABLE', 'Available'), ('OCCUPIED', 'Occupied'), ('RESERVED', 'Reserved'), ('NEEDS_CLEANING', 'Needs Cleaning'), ('OUT_OF_SERVICE', 'Out of Service')], default='AVAILABLE', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['number'],
                'indexes': [models.Index(fields=['status', 'capacity'], name='table_status_capacity_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('capacity__gte', 1)), name='table_capacity_positive')],
            },
        ),
    ]
