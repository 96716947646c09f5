"""devispack : packs de localisation et moteur de templates de devis.

FR: Conformité fiscale et légale (Belgique, France, Suisse) et rendu de
    templates de devis et factures pour les artisans.
EN: Tax and legal compliance (Belgium, France, Switzerland) and quote and
    invoice template rendering for tradespeople.
"""

__version__ = "0.3.0"
