from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def document_fields(related_name):
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='활성 상태')),
        ('country', models.CharField(help_text='세율 결정 기준 국가 (ISO-3166 alpha-2)', max_length=2)),
        ('currency', models.CharField(default='USD', max_length=3)),
        ('template', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name=related_name, to='invoices.invoicetemplate')),
        ('subtotal', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
        ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
        ('tax_rate', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
        ('is_tax_exempt', models.BooleanField(default=False)),
        ('applied_tax_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5)),
        ('tax', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
        ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
        ('notes', models.TextField(blank=True)),
        ('terms', models.TextField(blank=True)),
        ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name=related_name, to=settings.AUTH_USER_MODEL)),
        ('company_profile', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name=related_name, to='businesses.companyprofile')),
        ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name=related_name, to='businesses.client')),
    ]


def line_item_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('description', models.CharField(max_length=500)),
        ('quantity', models.DecimalField(decimal_places=2, default=Decimal('1.00'), max_digits=10)),
        ('unit_price', models.DecimalField(decimal_places=2, max_digits=10)),
        ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0.00')), django.core.validators.MaxValueValidator(Decimal('100.00'))])),
        ('amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), editable=False, max_digits=12)),
        ('sort_order', models.PositiveIntegerField(default=0)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('businesses', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='InvoiceTemplate',
            fields=[
                ('id', models.SlugField(max_length=30, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('preview_url', models.URLField(blank=True)),
                ('type', models.CharField(choices=[('invoice', '인보이스'), ('quote', '견적서'), ('both', '공용')], default='both', max_length=10)),
                ('is_default', models.BooleanField(default=False)),
                ('is_premium', models.BooleanField(default=False)),
            ],
            options={
                'db_table': 'invoice_templates',
                'ordering': ['-is_default', 'is_premium', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Quotation',
            fields=document_fields('quotations') + [
                ('quote_number', models.CharField(max_length=50)),
                ('quote_date', models.DateField()),
                ('valid_until', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('draft', '작성중'), ('sent', '발송'), ('accepted', '수락'), ('declined', '거절'), ('expired', '만료')], db_index=True, default='draft', max_length=20)),
            ],
            options={
                'db_table': 'quotations',
                'ordering': ['-quote_date', '-id'],
                'indexes': [models.Index(fields=['user', 'is_active', 'status'], name='quotation_user_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Invoice',
            fields=document_fields('invoices') + [
                ('invoice_number', models.CharField(max_length=50)),
                ('invoice_date', models.DateField()),
                ('due_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('draft', '작성중'), ('sent', '발송'), ('paid', '결제완료'), ('overdue', '연체'), ('cancelled', '취소')], db_index=True, default='draft', max_length=20)),
                ('quotation', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='invoices', to='invoices.quotation')),
            ],
            options={
                'db_table': 'invoices',
                'ordering': ['-invoice_date', '-id'],
                'indexes': [models.Index(fields=['user', 'is_active', 'status'], name='invoice_user_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='QuotationItem',
            fields=line_item_fields() + [
                ('quotation', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='invoices.quotation')),
            ],
            options={
                'db_table': 'quotation_items',
                'ordering': ['sort_order', 'id'],
            },
        ),
        migrations.CreateModel(
            name='InvoiceItem',
            fields=line_item_fields() + [
                ('invoice', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='invoices.invoice')),
                ('quotation_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='invoice_items', to='invoices.quotationitem')),
            ],
            options={
                'db_table': 'invoice_items',
                'ordering': ['sort_order', 'id'],
            },
        ),
    ]
