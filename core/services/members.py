import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from core.constants import UserRole
from core.models import Achievement, Profile, TeamGroup
from core.utils import clean_str
from reports.services.streaks import AchievementRecord, UserRecord

logger = logging.getLogger(__name__)


class MemberError(ValueError):
    pass


def load_user_record(user_id, for_update=False):
    """
    Load a member's streak state as a typed record.
    Raises Profile.DoesNotExist when the member has no profile.
    """
    qs = Profile.objects.all()
    if for_update:
        qs = qs.select_for_update()
    profile = qs.get(user_id=user_id)
    achievements = tuple(
        AchievementRecord(
            id=a.code,
            name=a.name,
            icon=a.icon,
            description=a.description,
            unlocked_at=a.unlocked_at,
        )
        for a in Achievement.objects.filter(user_id=user_id).order_by('unlocked_at', 'id')
    )
    return UserRecord(
        user_id=user_id,
        streak=profile.streak,
        last_submit_date=profile.last_submit_date,
        achievements=achievements,
    )


def save_user_record(record: UserRecord):
    """
    Persist streak fields and any achievements not yet stored.
    Returns the newly stored achievement records.
    """
    Profile.objects.filter(user_id=record.user_id).update(
        streak=record.streak,
        last_submit_date=record.last_submit_date,
    )
    stored = set(Achievement.objects.filter(user_id=record.user_id).values_list('code', flat=True))
    new_items = [a for a in record.achievements if a.id not in stored]
    if new_items:
        Achievement.objects.bulk_create([
            Achievement(
                user_id=record.user_id,
                code=a.id,
                name=a.name,
                icon=a.icon,
                description=a.description,
                unlocked_at=a.unlocked_at,
            )
            for a in new_items
        ])
    return new_items


def serialize_achievement(achievement):
    # accepts both the model and AchievementRecord
    return {
        'id': getattr(achievement, 'code', None) or achievement.id,
        'name': achievement.name,
        'icon': achievement.icon,
        'description': achievement.description,
        'unlocked_at': achievement.unlocked_at.isoformat(),
    }


def serialize_member(user):
    profile = user.profile
    return {
        'id': user.id,
        'username': user.username,
        'name': profile.display_name,
        'email': user.email,
        'role': profile.role,
        'group_id': profile.group_id,
        'streak': profile.streak,
        'last_submit_date': profile.last_submit_date.isoformat() if profile.last_submit_date else None,
        'achievements': [serialize_achievement(a) for a in user.achievements.all()],
        'created_at': profile.created_at.isoformat(),
    }


def list_members():
    User = get_user_model()
    return User.objects.filter(profile__isnull=False).select_related('profile').prefetch_related('achievements').order_by('id')


def _resolve_group(group_id):
    if group_id in (None, ''):
        return None
    try:
        return TeamGroup.objects.get(pk=int(group_id))
    except (TypeError, ValueError, TeamGroup.DoesNotExist):
        raise MemberError("小组不存在 / Group not found")


def create_member(name, email, password, group_id=None, role=UserRole.USER):
    """
    Create a user plus profile with a fresh streak. Email doubles as username.
    """
    name = clean_str(name, 'name', MemberError)
    email = clean_str(email, 'email', MemberError).lower()
    if not name:
        raise MemberError("请填写姓名 / Name is required")
    if not email:
        raise MemberError("请填写邮箱 / Email is required")
    if password is not None and not isinstance(password, str):
        raise MemberError("password 必须是字符串 / password must be a string")
    if not password:
        raise MemberError("请填写密码 / Password is required")

    User = get_user_model()
    if User.objects.filter(email__iexact=email).exists() or User.objects.filter(username__iexact=email).exists():
        raise MemberError("该邮箱已被注册 / Email already registered")

    group = _resolve_group(group_id)
    with transaction.atomic():
        user = User.objects.create_user(username=email, email=email, password=password, first_name=name[:150])
        profile, _ = Profile.objects.get_or_create(user=user)
        profile.role = role
        profile.group = group
        profile.save(update_fields=['role', 'group'])
        user.profile = profile
    logger.info(f"Member created: {email} (role={role}, group={group_id})")
    return user


def invite_member(name, email, group_id=None, invited_by=None):
    user = create_member(
        name, email,
        password=getattr(settings, 'INVITE_DEFAULT_PASSWORD', 'password'),
        group_id=group_id,
    )
    logger.info(f"Member {email} invited by {invited_by}")
    return user
