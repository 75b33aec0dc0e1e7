"""
문서 금액 자동 재계산

- 품목 저장/삭제 시
- 세금 계산에 영향을 주는 헤더 필드(할인, 세율, 면세, 국가) 저장 시
"""
from django.db.models import QuerySet
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Invoice, InvoiceItem, LineItem, Quotation, QuotationItem
from .utils import recalculate_totals

TAX_INPUT_FIELDS = frozenset({'discount', 'tax_rate', 'is_tax_exempt', 'country'})


@receiver(post_save, sender=Invoice)
@receiver(post_save, sender=Quotation)
def recalculate_on_document_save(sender, instance, raw=False, update_fields=None, **kwargs):
    if raw:
        return
    # 금액/상태만 저장하는 경우는 재계산하지 않음 (recalculate_totals 자신의 저장 포함)
    if update_fields is not None and not TAX_INPUT_FIELDS.intersection(update_fields):
        return
    recalculate_totals(instance)


@receiver(post_save, sender=InvoiceItem)
@receiver(post_save, sender=QuotationItem)
def recalculate_on_item_save(sender, instance, raw=False, **kwargs):
    if raw:
        return
    recalculate_totals(instance.document)


def _is_item_deletion(origin):
    """삭제가 품목(또는 품목 QuerySet)에서 시작되었는지"""
    if isinstance(origin, LineItem):
        return True
    return isinstance(origin, QuerySet) and issubclass(origin.model, LineItem)


@receiver(post_delete, sender=InvoiceItem)
@receiver(post_delete, sender=QuotationItem)
def recalculate_on_item_delete(sender, instance, origin=None, **kwargs):
    # 문서/사용자 삭제에 따른 연쇄 삭제는 품목이 먼저 지워지고 문서가 아직 남아있으므로
    # 삭제 시작점(origin)으로 구분
    if not _is_item_deletion(origin):
        return
    recalculate_totals(instance.document)
