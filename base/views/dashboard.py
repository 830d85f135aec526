# base/views/dashboard.py
from django.shortcuts import redirect

from ..roles import home_url_name


def home_view(request):
    # كل دور يُوجَّه إلى لوحته الخاصة
    user = getattr(request, "session_user", None)
    if not user:
        return redirect("base:login")
    return redirect(home_url_name(user.role))
