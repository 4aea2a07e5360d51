# activity/urls.py
from rest_framework.routers import DefaultRouter
from .views import ActivityEntryViewSet

router = DefaultRouter()
router.register(r"activity", ActivityEntryViewSet, basename="activity")

urlpatterns = router.urls
