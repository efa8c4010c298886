from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    # Versioned API, one router per module
    path("api/v1/", include("modules.accounts.urls")),
    path("api/v1/", include("modules.catalog.urls")),
    path("api/v1/", include("modules.orders.urls")),
    path("api/v1/", include("modules.delivery.urls")),
    path("api/v1/", include("modules.invoicing.urls")),
    path("api/v1/", include("modules.notifications.urls")),
    path("api/v1/", include("modules.support.urls")),
]
