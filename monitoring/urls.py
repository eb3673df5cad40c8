from rest_framework.routers import DefaultRouter

from .views import ClientConnectionController, ClientEventController

app_name = "monitoring"

router = DefaultRouter()
router.register(r"client_connection", ClientConnectionController, basename="client_connection")
router.register(r"client_event", ClientEventController, basename="client_event")

urlpatterns = router.urls
