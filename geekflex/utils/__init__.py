"""Utilitaires et constantes partagees."""
