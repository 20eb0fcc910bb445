"""
Application-wide constants.

Status values, roles, catalog identifiers and user-facing messages shared by
the API routes, server actions and the cart store.
"""

from __future__ import annotations

from typing import Literal

# --- Cart ---

CART_STORAGE_KEY = "okit-boost-cart"

# --- Statuses ---

OrderStatus = Literal["pending", "processing", "completed", "cancelled", "failed"]
PaymentStatus = Literal["pending", "paid", "verified", "failed", "cancelled", "refunded"]
TrialStatus = Literal["pending", "approved", "delivered", "rejected"]
UserRole = Literal["user", "admin", "moderator"]

ORDER_STATUS = {
    "PENDING": "pending",
    "PROCESSING": "processing",
    "COMPLETED": "completed",
    "CANCELLED": "cancelled",
    "FAILED": "failed",
}

PAYMENT_STATUS = {
    "PENDING": "pending",
    "PAID": "paid",
    "VERIFIED": "verified",
    "FAILED": "failed",
    "CANCELLED": "cancelled",
    "REFUNDED": "refunded",
}

TRIAL_STATUS = {
    "PENDING": "pending",
    "APPROVED": "approved",
    "DELIVERED": "delivered",
    "REJECTED": "rejected",
}

USER_ROLES = {
    "USER": "user",
    "ADMIN": "admin",
    "MODERATOR": "moderator",
}

# --- Catalog ---

PLATFORMS = {
    "TIKTOK": "tiktok",
    "INSTAGRAM": "instagram",
    "YOUTUBE": "youtube",
    "FACEBOOK": "facebook",
    "TWITTER": "twitter",
    "TELEGRAM": "telegram",
}

SERVICE_TYPES = {
    "FOLLOWERS": "followers",
    "LIKES": "likes",
    "VIEWS": "views",
    "COMMENTS": "comments",
    "SHARES": "shares",
    "SUBSCRIBERS": "subscribers",
}

SERVICE_QUALITY = {
    "HIGH": "high",
    "MEDIUM": "medium",
    "LOW": "low",
}

DELIVERY_SPEED = {
    "INSTANT": "instant",
    "FAST": "fast",
    "NORMAL": "normal",
    "SLOW": "slow",
}

# Defaults applied when an admin creates a service without these fields
SERVICE_DEFAULTS = {
    "min_quantity": 1,
    "max_quantity": 10000,
    "delivery_time": "0-1 heures",
    "quality": "HIGH",
}

PLATFORM_DEFAULT_COLORS = ("#3B82F6", "#1D4ED8")

# --- Currencies ---

CURRENCIES = {
    "USD": "USD",
    "CDF": "CDF",
}

CURRENCY_CONFIG = {
    "USD": {"code": "USD", "symbol": "$", "name": "Dollar américain"},
    "CDF": {"code": "CDF", "symbol": "FC", "name": "Franc congolais"},
}

EXCHANGE_RATES = {
    "USD_TO_CDF": 2800,
    "CDF_TO_USD": 0.000357,
}

DEFAULT_LIMITS = {
    "MIN_QUANTITY": 100,
    "MAX_QUANTITY": 100000,
    "MAX_FILE_SIZE": 5 * 1024 * 1024,
    "MAX_UPLOAD_FILES": 5,
}

# --- Messages ---

ERROR_MESSAGES = {
    "UNAUTHORIZED": "Vous devez être connecté pour effectuer cette action",
    "FORBIDDEN": "Vous n'avez pas les permissions nécessaires",
    "NOT_FOUND": "Ressource non trouvée",
    "VALIDATION_ERROR": "Données invalides",
    "PAYMENT_FAILED": "Le paiement a échoué",
    "SERVICE_UNAVAILABLE": "Service temporairement indisponible",
    "NETWORK_ERROR": "Erreur de connexion réseau",
    "INTERNAL_ERROR": "Erreur interne du serveur",
}

SUCCESS_MESSAGES = {
    "ORDER_CREATED": "Commande créée avec succès",
    "PAYMENT_SUCCESS": "Paiement effectué avec succès",
    "PROFILE_UPDATED": "Profil mis à jour avec succès",
    "PASSWORD_UPDATED": "Mot de passe modifié avec succès",
    "EMAIL_SENT": "Email envoyé avec succès",
}

NOT_AUTHENTICATED = "Non authentifié"
ACCESS_DENIED = "Accès refusé"

# --- Routing ---

AUTH_DEFAULT_NEXT = "/mon-compte"
AUTH_ERROR_PATH = "/auth/auth-code-error"
LOGIN_PATH = "/connexion"
