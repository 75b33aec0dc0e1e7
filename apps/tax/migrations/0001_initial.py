from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TaxRate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('country', models.CharField(max_length=100)),
                ('country_code', models.CharField(db_index=True, max_length=2)),
                ('name', models.CharField(help_text='예: VAT, GST, Sales Tax', max_length=50)),
                ('rate', models.DecimalField(decimal_places=2, help_text='퍼센트 (20.00 = 20%)', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('is_default', models.BooleanField(db_index=True, default=False)),
            ],
            options={
                'db_table': 'tax_rates',
                'ordering': ['country_code', '-is_default', 'name'],
                'indexes': [models.Index(fields=['country_code', 'is_default'], name='tax_rate_cc_default_idx')],
            },
        ),
    ]
