from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Customer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Name the booking is held under', max_length=255)),
                ('phone_number', models.CharField(blank=True, help_text='Contact phone, unique when provided', max_length=30, null=True, unique=True)),
                ('email', models.EmailField(blank=True, help_text='Contact email, stored lower-cased, unique when provided', max_length=254, null=True, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Customer',
                'verbose_name_plural': 'Customers',
                'ordering': ['name', 'id'],
                'indexes': [models.Index(fields=['name'], name='customer_name_idx')],
            },
        ),
    ]
