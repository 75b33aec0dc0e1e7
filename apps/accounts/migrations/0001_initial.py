from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SubscriptionPlan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(max_length=30, unique=True)),
                ('name', models.CharField(max_length=100)),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('interval', models.CharField(choices=[('monthly', '월간'), ('yearly', '연간'), ('one-time', '1회')], default='monthly', max_length=20)),
                ('features', models.JSONField(blank=True, default=list)),
                ('invoice_quota', models.IntegerField(default=10)),
                ('quote_quota', models.IntegerField(default=10)),
                ('material_records_limit', models.IntegerField(default=-1)),
                ('includes_central_masters', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
            ],
            options={
                'db_table': 'subscription_plans',
                'ordering': ['price', 'code'],
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('plan_id', models.CharField(db_index=True, default='free', max_length=30)),
                ('invoice_quota', models.IntegerField(default=10)),
                ('invoices_used', models.PositiveIntegerField(default=0)),
                ('quote_quota', models.IntegerField(default=10)),
                ('quotes_used', models.PositiveIntegerField(default=0)),
                ('material_records_used', models.PositiveIntegerField(default=0)),
                ('subscription_status', models.CharField(choices=[('active', '활성'), ('cancelled', '해지'), ('expired', '만료')], default='active', max_length=20)),
                ('subscription_expires_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'profiles',
            },
        ),
    ]
