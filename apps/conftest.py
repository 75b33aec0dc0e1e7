# =============================================================================
# conftest.py - pytest 공통 설정 및 Fixtures
# =============================================================================

import pytest
from decimal import Decimal
from django.contrib.auth.models import User
from django.test import Client as DjangoClient

from apps.accounts.models import SubscriptionPlan
from apps.businesses.models import Client, CompanyProfile
from apps.catalog.models import CompanyItem, MasterItem, MasterTerm
from apps.invoices.models import Invoice, InvoiceItem, InvoiceTemplate, Quotation, QuotationItem
from apps.tax.models import TaxRate


# =============================================================================
# 사용자 Fixtures
# =============================================================================

@pytest.fixture
def user(db):
    """기본 테스트 사용자 (Profile은 시그널로 자동 생성)"""
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='testpass123'
    )


@pytest.fixture
def other_user(db):
    """다른 테스트 사용자"""
    return User.objects.create_user(
        username='otheruser',
        email='other@example.com',
        password='testpass123'
    )


@pytest.fixture
def authenticated_client(user):
    """로그인된 클라이언트"""
    client = DjangoClient()
    client.login(username='testuser', password='testpass123')
    client.user = user  # 편의를 위해 user 속성 추가
    return client


@pytest.fixture
def other_client(other_user):
    """다른 사용자로 로그인된 클라이언트"""
    client = DjangoClient()
    client.login(username='otheruser', password='testpass123')
    return client


# =============================================================================
# 회사 / 고객 Fixtures
# =============================================================================

@pytest.fixture
def company_profile(db, user):
    """기본 발행 회사 (영국, 은행 정보 포함)"""
    return CompanyProfile.objects.create(
        user=user,
        name='Acme Ltd',
        country='gb',
        bank_name='Barclays',
        bank_account_name='Acme Ltd',
        bank_account_number='12345678',
        bank_swift_bic='BARCGB22',
        is_default=True,
    )


@pytest.fixture
def billing_client(db, user):
    """인보이스 수신 고객"""
    return Client.objects.create(
        user=user,
        name='Globex',
        email='billing@globex.example',
        country='GB',
    )


# =============================================================================
# 세율 Fixtures
# =============================================================================

@pytest.fixture
def gb_vat(db):
    """영국 표준 VAT 20%"""
    return TaxRate.objects.create(
        country='United Kingdom',
        country_code='GB',
        name='VAT',
        rate=Decimal('20.00'),
        is_default=True,
    )


# =============================================================================
# 문서 Fixtures
# =============================================================================

@pytest.fixture
def invoice(db, user, company_profile, billing_client):
    """품목 없는 영국 인보이스"""
    return Invoice.objects.create(
        user=user,
        company_profile=company_profile,
        client=billing_client,
        invoice_number='INV-0001',
        invoice_date='2024-01-15',
        country='GB',
        currency='GBP',
    )


@pytest.fixture
def invoice_with_items(invoice, gb_vat):
    """품목 2개 (합계 1,000.00) 인보이스"""
    InvoiceItem.objects.create(
        invoice=invoice, description='Consulting', quantity=Decimal('10'), unit_price=Decimal('80.00')
    )
    InvoiceItem.objects.create(
        invoice=invoice, description='Hosting', quantity=Decimal('1'), unit_price=Decimal('200.00'), sort_order=1
    )
    invoice.refresh_from_db()
    return invoice


@pytest.fixture
def quotation(db, user, company_profile, billing_client, gb_vat):
    """품목 1개 (500.00) 견적서"""
    quotation = Quotation.objects.create(
        user=user,
        company_profile=company_profile,
        client=billing_client,
        quote_number='QUO-0001',
        quote_date='2024-01-10',
        country='GB',
        currency='GBP',
        discount=Decimal('50.00'),
        notes='Thanks',
    )
    QuotationItem.objects.create(
        quotation=quotation, description='Design', quantity=Decimal('5'), unit_price=Decimal('100.00')
    )
    quotation.refresh_from_db()
    return quotation


# =============================================================================
# 플랜 / 템플릿 Fixtures
# =============================================================================

@pytest.fixture
def free_plan(db):
    """중앙 마스터 미포함 무료 플랜"""
    return SubscriptionPlan.objects.create(
        code='free',
        name='Free Plan',
        invoice_quota=10,
        quote_quota=5,
        material_records_limit=50,
        includes_central_masters=False,
    )


@pytest.fixture
def pro_plan(db):
    """중앙 마스터 포함, 사용 한도 2건"""
    return SubscriptionPlan.objects.create(
        code='monthly',
        name='Professional',
        price=Decimal('9.99'),
        invoice_quota=-1,
        quote_quota=-1,
        material_records_limit=2,
        includes_central_masters=True,
    )


@pytest.fixture
def pro_user(user, pro_plan):
    """pro_plan 구독 사용자"""
    user.profile.apply_plan(pro_plan)
    return user


@pytest.fixture
def templates(db):
    """기본 / 프리미엄 템플릿"""
    return [
        InvoiceTemplate.objects.create(id='classic', name='Classic', type='both', is_default=True),
        InvoiceTemplate.objects.create(id='executive', name='Executive', type='invoice', is_premium=True),
        InvoiceTemplate.objects.create(id='proposal', name='Proposal', type='quote'),
    ]


# =============================================================================
# 카탈로그 Fixtures
# =============================================================================

@pytest.fixture
def master_item(db):
    return MasterItem.objects.create(
        code='LAB-001',
        name='Labour',
        description='Skilled labour per hour',
        category='services',
        unit_of_measure='hour',
        default_price=Decimal('45.00'),
    )


@pytest.fixture
def master_term(db):
    return MasterTerm.objects.create(
        category='payment',
        title='Payment due in 30 days',
        content='Payment is due within 30 days of the invoice date.',
    )


@pytest.fixture
def company_item(user):
    return CompanyItem.objects.create(
        user=user,
        name='Website hosting',
        description='Annual hosting',
        category='services',
        unit_of_measure='year',
        price=Decimal('120.00'),
    )
