from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

PRICE_VALIDATORS = [django.core.validators.MinValueValidator(Decimal('0.00'))]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('invoices', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='MasterItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('code', models.CharField(max_length=50, unique=True)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(db_index=True, max_length=100)),
                ('unit_of_measure', models.CharField(help_text='예: ea, hour, m2', max_length=30)),
                ('default_price', models.DecimalField(decimal_places=2, max_digits=10, validators=PRICE_VALIDATORS)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
            ],
            options={
                'db_table': 'master_items',
                'ordering': ['category', 'name'],
            },
        ),
        migrations.CreateModel(
            name='MasterTerm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.CharField(db_index=True, help_text='예: payment, warranty', max_length=100)),
                ('title', models.CharField(max_length=200)),
                ('content', models.TextField()),
                ('is_active', models.BooleanField(db_index=True, default=True)),
            ],
            options={
                'db_table': 'master_terms',
                'ordering': ['category', 'title'],
            },
        ),
        migrations.CreateModel(
            name='CompanyItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='활성 상태')),
                ('code', models.CharField(blank=True, max_length=50)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(db_index=True, max_length=100)),
                ('unit_of_measure', models.CharField(max_length=30)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=PRICE_VALIDATORS)),
                ('cost', models.DecimalField(blank=True, decimal_places=2, help_text='원가 (선택)', max_digits=10, null=True, validators=PRICE_VALIDATORS)),
                ('master_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='company_items', to='catalog.masteritem')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='company_items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'company_items',
                'ordering': ['category', 'name'],
                'indexes': [models.Index(fields=['user', 'is_active', 'category'], name='company_item_user_cat_idx')],
            },
        ),
        migrations.CreateModel(
            name='CompanyTerm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='활성 상태')),
                ('category', models.CharField(db_index=True, max_length=100)),
                ('title', models.CharField(max_length=200)),
                ('content', models.TextField()),
                ('is_default', models.BooleanField(default=False)),
                ('master_term', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='company_terms', to='catalog.masterterm')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='company_terms', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'company_terms',
                'ordering': ['category', 'title'],
            },
        ),
        migrations.CreateModel(
            name='QuotationTerm',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(max_length=100)),
                ('title', models.CharField(max_length=200)),
                ('content', models.TextField()),
                ('sort_order', models.PositiveIntegerField(default=0)),
                ('company_term', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quotation_terms', to='catalog.companyterm')),
                ('master_term', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='quotation_terms', to='catalog.masterterm')),
                ('quotation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quotation_terms', to='invoices.quotation')),
            ],
            options={
                'db_table': 'quotation_terms',
                'ordering': ['sort_order', 'category', 'id'],
            },
        ),
        migrations.CreateModel(
            name='MaterialUsage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('used_at', models.DateTimeField(auto_now_add=True)),
                ('master_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='usages', to='catalog.masteritem')),
                ('master_term', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='usages', to='catalog.masterterm')),
                ('quotation', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='material_usages', to='invoices.quotation')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='material_usages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'material_usage',
                'ordering': ['-used_at'],
            },
        ),
    ]
