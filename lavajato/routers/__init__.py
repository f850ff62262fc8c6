# lavajato/routers/__init__.py

from .auth.auth_router import router as auth_router
from .users.team_router import router as team_router
from .support.activity_router import router as activity_router

from .masters.customer_router import router as customer_router
from .masters.vehicle_router import router as vehicle_router
from .masters.wash_service_router import router as wash_service_router

from .inventory.product_router import router as product_router

from .scheduling.appointment_router import router as appointment_router

from .orders.order_router import router as order_router

from .dashboard.dashboard_router import router as dashboard_router

from .seo.seo_router import router as seo_router


__all__ = [
"auth_router",
"team_router",
"activity_router",

"customer_router",
"vehicle_router",
"wash_service_router",

"product_router",

"appointment_router",

"order_router",

"dashboard_router",

"seo_router",
]
