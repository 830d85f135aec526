# base/context_processors.py
from base.roles import NAV_ITEMS


def session_user(request):
    user = getattr(request, "session_user", None)
    if not user:
        return {}

    # ✅ قائمة التنقّل حسب الدور فقط
    return {
        "session_user": user,
        "nav_items": NAV_ITEMS.get(user.role, []),
    }
