"""
프로젝트 공통 추상 모델

- TimeStampedModel: 생성/수정 시각
- SoftDeleteModel: is_active 기반 소프트 삭제 + active 매니저
"""
from django.db import models


class TimeStampedModel(models.Model):
    """생성/수정 시각 자동 기록"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteManager(models.Manager):
    """is_active=True 인 레코드만 반환"""

    def get_queryset(self):
        return super().get_queryset().filter(is_active=True)


class SoftDeleteModel(TimeStampedModel):
    """
    소프트 삭제 추상 모델

    거래처/회사 정보가 삭제되어도 과거 인보이스가 참조할 수 있도록
    실제 삭제 대신 is_active=False 로 표시합니다.

    Managers:
        objects: 전체 (삭제 포함)
        active: 활성 레코드만
    """
    is_active = models.BooleanField(default=True, db_index=True, verbose_name="활성 상태")

    objects = models.Manager()
    active = SoftDeleteManager()

    class Meta:
        abstract = True

    def soft_delete(self):
        self.is_active = False
        self.save(update_fields=['is_active', 'updated_at'])

    def restore(self):
        self.is_active = True
        self.save(update_fields=['is_active', 'updated_at'])
