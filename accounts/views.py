# accounts/views.py
from django.contrib.auth import login as auth_login, logout as auth_logout
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from .models import AdminUser
from .permissions import IsOperator, IsSuperAdmin
from .serializers import AdminTokenObtainPairSerializer, AdminUserSerializer


class LoginView(TokenObtainPairView):
    """
    Returns JWT tokens AND creates a Django session so the dashboard pages
    work for the same operator.
    """
    serializer_class = AdminTokenObtainPairSerializer
    permission_classes = []

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)

        if response.status_code == 200:
            user = AdminUser.objects.filter(username=request.data.get('username')).first()
            if user is not None:
                auth_login(request, user)

        return response


class LogoutView(APIView):
    permission_classes = [IsOperator]

    def post(self, request):
        auth_logout(request)
        return Response({'message': 'Logged out'}, status=status.HTTP_200_OK)


class CurrentUserView(APIView):
    permission_classes = [IsOperator]

    def get(self, request):
        return Response(request.user.as_operator())


class AdminUserListView(generics.ListCreateAPIView):
    serializer_class = AdminUserSerializer
    permission_classes = [IsSuperAdmin]
    pagination_class = None

    def get_queryset(self):
        return AdminUser.objects.active().order_by('-created_at')


class AdminUserDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = AdminUserSerializer
    permission_classes = [IsSuperAdmin]
    queryset = AdminUser.objects.all()
