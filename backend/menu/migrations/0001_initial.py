from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='MenuItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Name of the dish.', max_length=200, unique=True)),
                ('description', models.TextField(blank=True, help_text='Description shown to guests.')),
                ('price', models.DecimalField(decimal_places=2, help_text='Current selling price. Orders capture it at order time.', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('is_available', models.BooleanField(default=True, help_text='Whether the kitchen can currently make this item.')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['name'],
                'indexes': [models.Index(fields=['is_available', 'name'], name='menu_available_name_idx')],
            },
        ),
    ]
