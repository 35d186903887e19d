from django.http import Http404
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import is_super_admin
from .models import TeamMember, Testimonial
from .serializers import SiteSettingSerializer, TeamMemberSerializer, TestimonialSerializer
from .services import get_site_setting, save_site_setting
from .site_config import SETTING_KEYS, InvalidSettingValue


class AdminTierMixin:
    """
    Anonymous and read-only callers get the public (active) rows; a super
    admin sees everything.
    """
    model = None

    def get_queryset(self):
        if is_super_admin(self.request.user):
            return self.model.objects.all()
        return self.model.public.all()


class TeamMemberListView(AdminTierMixin, generics.ListCreateAPIView):
    model = TeamMember
    serializer_class = TeamMemberSerializer
    pagination_class = None


class TeamMemberDetailView(AdminTierMixin, generics.RetrieveUpdateDestroyAPIView):
    model = TeamMember
    serializer_class = TeamMemberSerializer


class TestimonialListView(AdminTierMixin, generics.ListCreateAPIView):
    model = Testimonial
    serializer_class = TestimonialSerializer
    filterset_fields = ['project']
    pagination_class = None


class TestimonialDetailView(AdminTierMixin, generics.RetrieveUpdateDestroyAPIView):
    model = Testimonial
    serializer_class = TestimonialSerializer


class SiteSettingView(APIView):
    """GET or PUT the full value stored under one settings key."""

    def _check_key(self, key):
        if key not in SETTING_KEYS:
            raise Http404

    def get(self, request, key):
        self._check_key(key)
        return Response({'setting_key': key, 'setting_value': get_site_setting(key)})

    def put(self, request, key):
        self._check_key(key)
        serializer = SiteSettingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            save_site_setting(key, serializer.validated_data['setting_value'])
        except InvalidSettingValue as exc:
            return Response({'error': str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({'setting_key': key, 'setting_value': get_site_setting(key)})
