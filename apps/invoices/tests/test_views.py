"""
인보이스 / 견적서 API 테스트

- 합계 요약 (본인 문서만)
- 견적서 → 인보이스 전환 (입력 검증, 쿼터 초과)
- 문서 / 품목 CRUD, 템플릿 목록
"""
import pytest
from decimal import Decimal
from io import StringIO
from django.core.management import call_command
from django.urls import reverse

from apps.accounts.models import Profile
from apps.businesses.models import Client
from apps.catalog.models import MaterialUsage
from apps.invoices.models import Invoice, InvoiceItem, InvoiceTemplate, Quotation, QuotationItem


@pytest.mark.django_db
class TestInvoiceSummaryView:

    def test_summary(self, authenticated_client, invoice_with_items):
        response = authenticated_client.get(
            reverse('invoices:invoice_summary', args=[invoice_with_items.pk])
        )

        data = response.json()
        assert response.status_code == 200
        assert data['number'] == 'INV-0001'
        assert data['tax_label'] == 'VAT (20%)'
        assert Decimal(data['total']) == Decimal('1200')
        assert data['formatted']['total'] == '£1,200.00'

    def test_locale_param(self, authenticated_client, invoice_with_items):
        response = authenticated_client.get(
            reverse('invoices:invoice_summary', args=[invoice_with_items.pk]), {'locale': 'en-GB'}
        )

        assert response.json()['formatted']['tax'] == '£200.00'

    def test_requires_login(self, client, invoice):
        response = client.get(reverse('invoices:invoice_summary', args=[invoice.pk]))

        assert response.status_code == 401
        assert response.json() == {'message': 'Unauthorized'}

    def test_other_users_invoice_is_404(self, other_client, invoice):
        response = other_client.get(reverse('invoices:invoice_summary', args=[invoice.pk]))

        assert response.status_code == 404

    def test_soft_deleted_invoice_is_404(self, authenticated_client, invoice):
        invoice.soft_delete()

        response = authenticated_client.get(reverse('invoices:invoice_summary', args=[invoice.pk]))

        assert response.status_code == 404

    def test_post_not_allowed(self, authenticated_client, invoice):
        response = authenticated_client.post(reverse('invoices:invoice_summary', args=[invoice.pk]))

        assert response.status_code == 405


@pytest.mark.django_db
class TestQuotationSummaryView:

    def test_summary(self, authenticated_client, quotation):
        response = authenticated_client.get(reverse('invoices:quotation_summary', args=[quotation.pk]))

        data = response.json()
        assert data['number'] == 'QUO-0001'
        assert Decimal(data['taxable_amount']) == Decimal('450')
        assert data['formatted']['discount'] == '-£50.00'
        assert data['formatted']['total'] == '£540.00'


@pytest.mark.django_db
class TestQuotationConvertView:

    def test_convert(self, authenticated_client, quotation):
        response = authenticated_client.post(
            reverse('invoices:quotation_convert', args=[quotation.pk]),
            {'invoice_number': 'INV-2024-010', 'due_date': '2024-03-01'}
        )

        data = response.json()
        assert response.status_code == 201
        assert data['invoice_number'] == 'INV-2024-010'
        assert data['due_date'] == '2024-03-01'
        assert data['quotation_id'] == quotation.pk
        assert Decimal(data['total']) == Decimal('540')
        assert Invoice.objects.get(pk=data['id']).quotation == quotation

    def test_default_number(self, authenticated_client, quotation):
        response = authenticated_client.post(reverse('invoices:quotation_convert', args=[quotation.pk]))

        assert response.status_code == 201
        assert response.json()['invoice_number'].startswith('INV-')

    @pytest.mark.parametrize("due_date", ['tomorrow', '2024-13-45'])
    def test_invalid_due_date(self, authenticated_client, quotation, due_date):
        response = authenticated_client.post(
            reverse('invoices:quotation_convert', args=[quotation.pk]), {'due_date': due_date}
        )

        assert response.status_code == 400
        assert not Invoice.objects.exists()

    def test_quota_exceeded(self, authenticated_client, user, quotation):
        profile = user.profile
        profile.invoices_used = profile.invoice_quota
        profile.save()

        response = authenticated_client.post(reverse('invoices:quotation_convert', args=[quotation.pk]))

        assert response.status_code == 403
        assert response.json() == {'message': 'You have reached your invoice quota for this period'}

    def test_other_users_quotation_is_404(self, other_client, quotation):
        response = other_client.post(reverse('invoices:quotation_convert', args=[quotation.pk]))

        assert response.status_code == 404

    def test_get_not_allowed(self, authenticated_client, quotation):
        response = authenticated_client.get(reverse('invoices:quotation_convert', args=[quotation.pk]))

        assert response.status_code == 405


@pytest.mark.django_db
class TestInvoiceCrudViews:
    """인보이스 생성/조회/수정/삭제"""

    list_url_name = 'invoices:invoice_list'

    @pytest.fixture
    def payload(self, company_profile, billing_client):
        return {'company_profile': company_profile.pk, 'client': billing_client.pk, 'country': 'gb'}

    def test_requires_login(self, client):
        response = client.get(reverse(self.list_url_name))

        assert response.status_code == 401

    def test_create_with_defaults(self, authenticated_client, user, payload):
        response = authenticated_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        data = response.json()
        assert response.status_code == 201
        assert data['invoice_number'].startswith('INV-')
        assert data['country'] == 'GB'
        assert data['currency'] == 'USD'
        assert data['status'] == 'draft'
        assert data['invoice_date']
        assert Profile.objects.get(user=user).invoices_used == 1

    def test_quota_exceeded(self, authenticated_client, user, payload):
        profile = user.profile
        profile.invoices_used = profile.invoice_quota
        profile.save()

        response = authenticated_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        assert response.status_code == 403
        assert response.json() == {'message': 'You have reached your invoice quota for this period'}
        assert not Invoice.objects.exists()

    def test_other_users_client_rejected(self, authenticated_client, other_user, payload):
        foreign = Client.objects.create(user=other_user, name='Foreign Co')
        payload['client'] = foreign.pk

        response = authenticated_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        assert response.status_code == 400
        assert response.json()['errors']['client'] == ['Invalid client']

    def test_other_users_company_profile_rejected(self, other_client, payload):
        response = other_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        errors = response.json()['errors']
        assert response.status_code == 400
        assert errors['company_profile'] == ['Invalid company profile']

    @pytest.mark.parametrize("extra,field", [
        ({'country': 'GBR'}, 'country'),
        ({'discount': '-1'}, 'discount'),
        ({'invoice_date': '2024-02-01', 'due_date': '2024-01-01'}, 'due_date'),
        ({'status': 'archived'}, 'status'),
    ])
    def test_invalid_input(self, authenticated_client, payload, extra, field):
        response = authenticated_client.post(
            reverse(self.list_url_name), {**payload, **extra}, content_type='application/json'
        )

        assert response.status_code == 400
        assert field in response.json()['errors']

    def test_premium_template_denied_on_free_plan(self, authenticated_client, payload, templates):
        payload['template'] = 'executive'

        response = authenticated_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        assert response.status_code == 400
        assert 'template' in response.json()['errors']

    def test_premium_template_on_paid_plan(self, authenticated_client, pro_user, payload, templates):
        payload['template'] = 'executive'

        response = authenticated_client.post(reverse(self.list_url_name), payload, content_type='application/json')

        assert response.status_code == 201
        assert response.json()['template_id'] == 'executive'

    def test_list_status_filter(self, authenticated_client, invoice):
        Invoice.objects.create(
            user=invoice.user, company_profile=invoice.company_profile, client=invoice.client,
            invoice_number='INV-0002', invoice_date='2024-02-01', country='GB', status='paid',
        )

        response = authenticated_client.get(reverse(self.list_url_name), {'status': 'paid'})

        assert [row['invoice_number'] for row in response.json()] == ['INV-0002']

    def test_detail_includes_items(self, authenticated_client, invoice_with_items):
        response = authenticated_client.get(reverse('invoices:invoice_detail', args=[invoice_with_items.pk]))

        data = response.json()
        assert [item['description'] for item in data['items']] == ['Consulting', 'Hosting']
        assert data['items'][0]['amount'] == '800.00'

    @pytest.mark.parametrize("changes,tax,total", [
        ({'discount': '100'}, '180.00', '1080.00'),
        ({'is_tax_exempt': True}, '0.00', '1000.00'),
        ({'tax_rate': '8.25'}, '82.50', '1082.50'),
    ])
    def test_update_recalculates_totals(self, authenticated_client, invoice_with_items, changes, tax, total):
        response = authenticated_client.put(
            reverse('invoices:invoice_detail', args=[invoice_with_items.pk]), changes,
            content_type='application/json',
        )

        data = response.json()
        assert response.status_code == 200
        assert data['tax'] == tax
        assert data['total'] == total
        assert data['invoice_number'] == 'INV-0001'

    def test_delete_is_soft(self, authenticated_client, invoice):
        response = authenticated_client.delete(reverse('invoices:invoice_detail', args=[invoice.pk]))

        assert response.status_code == 204
        assert Invoice.objects.filter(pk=invoice.pk, is_active=False).exists()
        assert authenticated_client.get(reverse(self.list_url_name)).json() == []

    def test_other_users_invoice_is_404(self, other_client, invoice):
        response = other_client.delete(reverse('invoices:invoice_detail', args=[invoice.pk]))

        assert response.status_code == 404
        assert Invoice.active.filter(pk=invoice.pk).exists()


@pytest.mark.django_db
class TestQuotationCrudViews:
    """견적서 생성/수정"""

    def test_create(self, authenticated_client, user, company_profile, billing_client):
        response = authenticated_client.post(
            reverse('invoices:quotation_list'),
            {
                'company_profile': company_profile.pk,
                'client': billing_client.pk,
                'country': 'DE',
                'quote_number': 'QUO-0100',
                'valid_until': '2099-01-01',
            },
            content_type='application/json',
        )

        data = response.json()
        assert response.status_code == 201
        assert data['quote_number'] == 'QUO-0100'
        assert data['valid_until'] == '2099-01-01'
        assert Profile.objects.get(user=user).quotes_used == 1

    def test_quota_exceeded(self, authenticated_client, user, company_profile, billing_client):
        profile = user.profile
        profile.quotes_used = profile.quote_quota
        profile.save()

        response = authenticated_client.post(
            reverse('invoices:quotation_list'),
            {'company_profile': company_profile.pk, 'client': billing_client.pk, 'country': 'GB', 'quote_number': 'Q-1'},
            content_type='application/json',
        )

        assert response.status_code == 403
        assert response.json() == {'message': 'You have reached your quote quota for this period'}

    def test_invoice_only_template_rejected(self, authenticated_client, pro_user, quotation, templates):
        response = authenticated_client.put(
            reverse('invoices:quotation_detail', args=[quotation.pk]), {'template': 'executive'},
            content_type='application/json',
        )

        assert response.status_code == 400
        assert 'template' in response.json()['errors']

    def test_valid_until_before_quote_date(self, authenticated_client, quotation):
        response = authenticated_client.put(
            reverse('invoices:quotation_detail', args=[quotation.pk]), {'valid_until': '2023-12-31'},
            content_type='application/json',
        )

        assert response.status_code == 400
        assert 'valid_until' in response.json()['errors']

    def test_delete_is_soft(self, authenticated_client, quotation):
        response = authenticated_client.delete(reverse('invoices:quotation_detail', args=[quotation.pk]))

        assert response.status_code == 204
        assert Quotation.objects.filter(pk=quotation.pk, is_active=False).exists()


@pytest.mark.django_db
class TestLineItemViews:
    """품목 추가/수정/삭제 시 문서 금액 재계산"""

    def test_add_invoice_item(self, authenticated_client, invoice_with_items):
        response = authenticated_client.post(
            reverse('invoices:invoice_item_list', args=[invoice_with_items.pk]),
            {'description': 'Support', 'quantity': '2', 'unit_price': '50'},
            content_type='application/json',
        )

        invoice_with_items.refresh_from_db()
        assert response.status_code == 201
        assert response.json()['amount'] == '100.00'
        assert invoice_with_items.subtotal == Decimal('1100.00')
        assert invoice_with_items.total == Decimal('1320.00')

    @pytest.mark.parametrize("payload,field", [
        ({'quantity': '1'}, 'description'),
        ({'description': 'x', 'quantity': '0', 'unit_price': '1'}, 'quantity'),
        ({'description': 'x', 'unit_price': '1', 'discount': '150'}, 'discount'),
    ])
    def test_invalid_item(self, authenticated_client, invoice, payload, field):
        response = authenticated_client.post(
            reverse('invoices:invoice_item_list', args=[invoice.pk]), payload, content_type='application/json'
        )

        assert response.status_code == 400
        assert field in response.json()['errors']

    def test_update_item(self, authenticated_client, invoice_with_items):
        item = invoice_with_items.items.get(description='Hosting')

        response = authenticated_client.put(
            reverse('invoices:invoice_item_detail', args=[invoice_with_items.pk, item.pk]),
            {'unit_price': '300'},
            content_type='application/json',
        )

        invoice_with_items.refresh_from_db()
        assert response.json()['amount'] == '300.00'
        assert invoice_with_items.total == Decimal('1320.00')

    def test_delete_item(self, authenticated_client, invoice_with_items):
        item = invoice_with_items.items.get(description='Consulting')

        response = authenticated_client.delete(
            reverse('invoices:invoice_item_detail', args=[invoice_with_items.pk, item.pk])
        )

        invoice_with_items.refresh_from_db()
        assert response.status_code == 204
        assert not InvoiceItem.objects.filter(pk=item.pk).exists()
        assert invoice_with_items.total == Decimal('240.00')

    def test_item_of_other_invoice_is_404(self, authenticated_client, invoice_with_items):
        other_invoice = Invoice.objects.create(
            user=invoice_with_items.user, company_profile=invoice_with_items.company_profile,
            client=invoice_with_items.client, invoice_number='INV-0002', invoice_date='2024-02-01', country='GB',
        )
        item = invoice_with_items.items.first()

        response = authenticated_client.get(
            reverse('invoices:invoice_item_detail', args=[other_invoice.pk, item.pk])
        )

        assert response.status_code == 404

    def test_quotation_item_from_master(self, authenticated_client, pro_user, quotation, master_item):
        response = authenticated_client.post(
            reverse('invoices:quotation_item_list', args=[quotation.pk]), {'master_item': master_item.pk},
            content_type='application/json',
        )

        data = response.json()
        quotation.refresh_from_db()
        assert response.status_code == 201
        assert data['description'] == 'Skilled labour per hour'
        assert data['unit_price'] == '45.00'
        assert data['master_item_id'] == master_item.pk
        assert quotation.total == Decimal('594.00')
        assert MaterialUsage.objects.get().quotation == quotation
        assert Profile.objects.get(user=pro_user).material_records_used == 1

    def test_quotation_item_from_master_denied_on_free_plan(self, authenticated_client, quotation, master_item):
        response = authenticated_client.post(
            reverse('invoices:quotation_item_list', args=[quotation.pk]), {'master_item': master_item.pk},
            content_type='application/json',
        )

        assert response.status_code == 403
        assert QuotationItem.objects.filter(quotation=quotation).count() == 1

    def test_quotation_item_from_company_item(self, authenticated_client, user, quotation, company_item):
        response = authenticated_client.post(
            reverse('invoices:quotation_item_list', args=[quotation.pk]),
            {'company_item': company_item.pk, 'quantity': '2'},
            content_type='application/json',
        )

        data = response.json()
        assert response.status_code == 201
        assert data['description'] == 'Annual hosting'
        assert data['amount'] == '240.00'
        assert data['company_item_id'] == company_item.pk
        assert Profile.objects.get(user=user).material_records_used == 0


@pytest.mark.django_db
class TestInvoiceTemplateListView:
    """템플릿 목록 (무료 플랜은 프리미엄 제외)"""

    url_name = 'invoices:invoice_template_list'

    @pytest.mark.parametrize("doc_type,expected", [
        (None, ['classic', 'proposal']),
        ('invoice', ['classic']),
        ('quote', ['classic', 'proposal']),
    ])
    def test_free_plan(self, authenticated_client, templates, doc_type, expected):
        params = {'type': doc_type} if doc_type else {}

        response = authenticated_client.get(reverse(self.url_name), params)

        assert [row['id'] for row in response.json()] == expected

    @pytest.mark.parametrize("doc_type,expected", [
        (None, ['classic', 'proposal', 'executive']),
        ('invoice', ['classic', 'executive']),
    ])
    def test_paid_plan(self, authenticated_client, pro_user, templates, doc_type, expected):
        params = {'type': doc_type} if doc_type else {}

        response = authenticated_client.get(reverse(self.url_name), params)

        assert [row['id'] for row in response.json()] == expected

    def test_requires_login(self, client, templates):
        response = client.get(reverse(self.url_name))

        assert response.status_code == 401


@pytest.mark.django_db
class TestSeedInvoiceTemplatesCommand:

    def test_creates_templates(self):
        out = StringIO()
        call_command('seed_invoice_templates', stdout=out)

        assert InvoiceTemplate.objects.count() == 6
        assert InvoiceTemplate.objects.get(is_default=True).pk == 'classic'
        assert set(InvoiceTemplate.objects.filter(is_premium=True).values_list('pk', flat=True)) == {
            'executive', 'dynamic', 'geometric',
        }
        assert '문서 템플릿 생성: 6개' in out.getvalue()

    def test_keeps_admin_changes(self):
        call_command('seed_invoice_templates', stdout=StringIO())
        InvoiceTemplate.objects.filter(pk='minimal').update(name='Plain')

        out = StringIO()
        call_command('seed_invoice_templates', stdout=out)

        assert InvoiceTemplate.objects.get(pk='minimal').name == 'Plain'
        assert '문서 템플릿 생성: 0개' in out.getvalue()
