from django.urls import path

from apps.converter.api.v1.views import ConverterViewSet

urlpatterns = [
    path('currencies/', ConverterViewSet.as_view({'get': 'currencies'}), name='converter-currencies'),
    path('convert/', ConverterViewSet.as_view({'post': 'convert'}), name='converter-convert'),
]
