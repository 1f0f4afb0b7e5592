"""Weather lookup (Open-Meteo geocoding + forecast) and WMO code labels."""
