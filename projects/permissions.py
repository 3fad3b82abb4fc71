"""
Custom permissions for projects and their content.
"""
from rest_framework import permissions


class IsProjectOwner(permissions.BasePermission):
    """
    Permission to check if user owns the project.
    """
    def has_object_permission(self, request, view, obj):
        return obj.user == request.user


class IsContentOwner(permissions.BasePermission):
    """
    Permission to check if user owns the project that the content belongs to.
    """
    def has_object_permission(self, request, view, obj):
        return obj.project.user == request.user
