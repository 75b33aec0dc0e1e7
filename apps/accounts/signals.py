"""
User-Profile 자동 연동 시그널

회원가입(User 생성) 시 구독 사용량을 담는 Profile을 자동으로 만듭니다.
"""
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    User 생성 시 Profile 자동 생성

    Example:
        user = User.objects.create_user(username='test')
        → user.profile.plan_id == 'free'
    """
    if created:
        Profile.objects.get_or_create(user=instance)
