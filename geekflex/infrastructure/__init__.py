"""Infrastructure GeekFlex : persistance SQLModel."""
