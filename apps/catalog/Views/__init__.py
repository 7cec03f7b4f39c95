from .Domain import DomainViewSet, DomainSubDomainTreeViewSet
from .SubDomain import SubDomainViewSet
from .Project import ProjectViewSet
