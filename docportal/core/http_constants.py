"""Constantes HTTP pour éviter les valeurs magiques dans le code."""

# Codes de statut HTTP courants
HTTP_OK = 200
HTTP_NOT_FOUND = 404
HTTP_INTERNAL_SERVER_ERROR = 500

# Codes de sortie des scripts
EXIT_OK = 0
EXIT_FAILURE = 1
