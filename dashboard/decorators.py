# dashboard/decorators.py

from functools import wraps
from django.shortcuts import redirect
from django.contrib import messages
from django.urls import reverse

from accounts.permissions import is_super_admin


def redirect_authenticated_user(view_func):
    """Send operators who are already signed in straight to the panel."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if request.user.is_authenticated and request.user.is_active:
            return redirect('dashboard:index')
        return view_func(request, *args, **kwargs)
    return wrapper


def operator_required(view_func):
    """Ensure the request comes from a signed-in, active admin user."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return redirect(f"{reverse('dashboard:login')}?next={request.path}")
        if not request.user.is_active:
            messages.error(request, 'Your account has been deactivated.')
            return redirect('dashboard:login')
        return view_func(request, *args, **kwargs)
    return wrapper


def super_admin_required(view_func):
    """Ensure the operator may write. Read-only admins are bounced back to the panel."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not is_super_admin(request.user):
            messages.error(request, 'Access denied. Super admins only.')
            return redirect('dashboard:index')
        return view_func(request, *args, **kwargs)
    return wrapper
