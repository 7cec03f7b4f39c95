from rest_framework.routers import DefaultRouter
from rest_framework_nested.routers import NestedDefaultRouter
from apps.catalog.Views import DomainViewSet, DomainSubDomainTreeViewSet, SubDomainViewSet, ProjectViewSet

router = DefaultRouter()
router.register("domains", DomainViewSet, basename="domains")
router.register("subdomains", SubDomainViewSet, basename="subdomains")

# /domains/{domain_pk}/subdomains/ -> nested tree of one domain
domain_router = NestedDefaultRouter(router, "domains", lookup='domain')
domain_router.register("subdomains", DomainSubDomainTreeViewSet, basename='domain-subdomains')

# /subdomains/{subdomain_pk}/projects/
subdomain_router = NestedDefaultRouter(router, "subdomains", lookup='subdomain')
subdomain_router.register("projects", ProjectViewSet, basename='subdomain-projects')

urlpatterns = router.urls + domain_router.urls + subdomain_router.urls
