from rest_framework.routers import DefaultRouter

from .views import InstitutionController

app_name = "institutions"

router = DefaultRouter()
router.register(r"institution", InstitutionController, basename="institution")

urlpatterns = router.urls
