"""Interface en ligne de commande GeekFlex (Typer + Rich)."""
