from .Image import ImageSerializer
from .Domain import DomainSerializer, DomainSummarySerializer
from .SubDomain import (
    SubDomainSerializer,
    SubDomainListSerializer,
    SubDomainDetailSerializer,
    SubDomainCreateSerializer,
    SubDomainUpdateSerializer,
    SubDomainReparentSerializer,
    LeafSubDomainSerializer,
)
from .Project import ProjectSerializer
