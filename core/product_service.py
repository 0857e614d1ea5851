"""Services utilitaires pour la gestion des produits et du catalogue modèle/coloris."""  # Docstring du module produit

from __future__ import annotations  # Active les annotations différées

import logging  # Journalisation des créations et mises à jour
from dataclasses import replace  # Fusion immuable des patchs produit
from typing import Any, Mapping, Sequence  # Types génériques pour annotations

from core.errors import DomainValidationError, ProductNotFoundError  # Erreurs métier partagées
from core.repositories.products import (  # Entités et contrat du dépôt produit
    Product,
    ProductColoris,
    ProductModel,
    ProductRepository,
    ProductType,
)
from core.settings import AppSettings  # Seuil de stock bas configurable
from core.validation import is_valid_product  # Prédicat de cohérence produit

logger = logging.getLogger(__name__)  # Logger du module

_PATCHABLE_FIELDS = {  # Champs modifiables via un patch partiel
    "name",
    "type",
    "coloris",
    "model_id",
    "coloris_id",
    "unit_cost",
    "sale_price",
    "stock",
    "weight",
}


def _default_threshold() -> float:
    return AppSettings.load().low_stock_threshold  # Seuil lu dans l'environnement (5 par défaut)


async def list_products(repo: ProductRepository) -> Sequence[Product]:
    """Retourne tous les produits du dépôt."""  # Docstring de la liste

    return await repo.list_all()  # Délégation pure


async def list_low_stock_products(
    repo: ProductRepository, threshold: float | None = None
) -> list[Product]:
    """Produits dont le stock est strictement inférieur au seuil."""  # Docstring stock bas

    limit = _default_threshold() if threshold is None else threshold  # Seuil effectif
    return [product for product in await repo.list_all() if product.stock < limit]  # Filtre strict


async def get_product_by_id(repo: ProductRepository, product_id: str) -> Product:
    """Charge un produit ou lève ``ProductNotFoundError``."""  # Docstring lecture unitaire

    product = await repo.get_by_id(product_id)  # Lecture dépôt
    if product is None:  # Produit absent
        raise ProductNotFoundError(f"Product with id {product_id} not found")  # Erreur explicite
    return product  # Renvoie l'entité


async def create_product(repo: ProductRepository, product: Product) -> Product:
    """Valide puis enregistre un nouveau produit."""  # Docstring création

    if not is_valid_product(product):  # Prix, stock ou nommage incohérents
        raise DomainValidationError("Product validation failed")  # Rejet avant tout appel dépôt
    created = await repo.create(product)  # Persistance
    logger.info("Product %s created", created.id)  # Trace de création
    return created  # Renvoie le produit persisté


async def update_product(
    repo: ProductRepository, product_id: str, changes: Mapping[str, Any]
) -> Product:
    """Applique un patch partiel après revalidation de l'enregistrement fusionné."""  # Docstring mise à jour

    existing = await get_product_by_id(repo, product_id)  # Lève si absent
    patch = {key: value for key, value in changes.items() if key in _PATCHABLE_FIELDS}  # Ignore les champs inconnus
    if "type" in patch and patch["type"] is not None:  # Type legacy fourni
        try:
            patch["type"] = ProductType(patch["type"])  # Normalise vers l'énumération
        except ValueError as exc:  # Type inconnu
            raise DomainValidationError(f"Invalid product type: {patch['type']}") from exc  # Erreur explicite
    merged = replace(existing, **patch)  # Enregistrement fusionné
    if not is_valid_product(merged):  # Revalidation complète
        raise DomainValidationError("Product validation failed")  # Rejet avant écriture
    updated = await repo.update(product_id, patch)  # Écriture du patch
    logger.info("Product %s updated (%s)", product_id, ", ".join(sorted(patch)) or "no change")  # Trace
    return updated  # Renvoie le produit stocké


async def list_models_by_type(repo: ProductRepository, product_type: ProductType) -> Sequence[ProductModel]:
    return await repo.list_models_by_type(product_type)  # Modèles d'une catégorie


async def list_coloris_by_model(repo: ProductRepository, model_id: str) -> Sequence[ProductColoris]:
    return await repo.list_coloris_by_model(model_id)  # Coloris d'un modèle


async def get_model_by_id(repo: ProductRepository, model_id: str) -> ProductModel | None:
    return await repo.get_model_by_id(model_id)  # None si inconnu


async def get_coloris_by_id(repo: ProductRepository, coloris_id: str) -> ProductColoris | None:
    return await repo.get_coloris_by_id(coloris_id)  # None si inconnu


__all__ = [
    "list_products",
    "list_low_stock_products",
    "get_product_by_id",
    "create_product",
    "update_product",
    "list_models_by_type",
    "list_coloris_by_model",
    "get_model_by_id",
    "get_coloris_by_id",
]
