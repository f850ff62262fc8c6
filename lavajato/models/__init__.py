# Tenants and users
from lavajato.models.tenants.car_wash_models import CarWash
from lavajato.models.users.user_models import User, RefreshToken
from lavajato.models.support.activity_models import UserActivity

# Masters
from lavajato.models.masters.customer_models import Customer
from lavajato.models.masters.vehicle_models import Vehicle
from lavajato.models.masters.wash_service_models import WashService, ServiceProductUsage

# Inventory
from lavajato.models.inventory.product_models import Product

# Scheduling
from lavajato.models.scheduling.appointment_models import Appointment

# Service orders
from lavajato.models.orders.service_order_models import ServiceOrder, ServiceOrderItem

# SEO
from lavajato.models.seo.seo_cache_models import SeoContentCache
