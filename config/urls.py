# config/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@permission_classes([AllowAny])
def health_check(request):
    return Response({
        'status': 'healthy',
        'message': 'Studio site API is running'
    })


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request):
    return Response({
        'message': 'Welcome to the studio site API',
        'version': '1.0.0',
        'endpoints': {
            'auth': '/api/auth/',
            'projects': '/api/projects/',
            'team': '/api/team/',
            'testimonials': '/api/testimonials/',
            'settings': '/api/settings/<key>/',
        }
    })


urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Dashboard (protected area)
    path('dashboard/', include('dashboard.urls')),

    # API Routes
    path('api/', api_root, name='api-root'),
    path('api/auth/', include('accounts.urls')),
    path('api/projects/', include('projects.urls')),
    path('api/', include('content.urls')),

    # Health check
    path('health/', health_check, name='health-check'),

    # Landing pages (frontend) - This should be last as catch-all
    path('', include('landing.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
