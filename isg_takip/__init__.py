"""İSG Takip - iş sağlığı ve güvenliği süre takip motoru."""
