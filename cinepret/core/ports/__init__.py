"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Les ports sont les frontieres de l'architecture hexagonale. Ils definissent
ce dont le domaine a besoin du monde exterieur sans specifier
comment ces besoins sont satisfaits.

Port de persistance :
- ICatalogueGateway : Stockage des films, exemplaires, adherents et prets
"""

from cinepret.core.ports.catalogue import ICatalogueGateway

__all__ = [
    "ICatalogueGateway",
]
