"""
Couche domaine (core).

Contient les entites metier, les ports (interfaces abstraites) et les exceptions.
Cette couche n'a AUCUNE dependance vers l'infrastructure (SQLModel, CLI).

Sous-packages :
- entities/ : Entites metier (Film, Copy, Member, Loan)
- ports/ : Interfaces abstraites definissant le contrat de persistance
- exceptions.py : Taxonomie des erreurs de pret
"""
