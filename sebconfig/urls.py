from rest_framework.routers import DefaultRouter

from .views import (
    ConfigurationAttributeController,
    ConfigurationController,
    ConfigurationNodeController,
    ConfigurationValueController,
    OrientationController,
    ViewController,
)

app_name = "sebconfig"

router = DefaultRouter()
router.register(r"configuration_node", ConfigurationNodeController, basename="configuration_node")
router.register(r"configuration", ConfigurationController, basename="configuration")
router.register(r"configuration_value", ConfigurationValueController, basename="configuration_value")
router.register(
    r"configuration_attribute", ConfigurationAttributeController, basename="configuration_attribute"
)
router.register(r"view", ViewController, basename="view")
router.register(r"orientation", OrientationController, basename="orientation")

urlpatterns = router.urls
