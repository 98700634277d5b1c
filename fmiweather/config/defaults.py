"""FMI endpoint constants and well-known observation stations."""

FMI_BASE_URL = "https://opendata.fmi.fi/wfs/fin"
STORED_QUERY_DAILY = "fmi::observations::weather::daily::simple"

# Station ids: https://ilmatieteenlaitos.fi/havaintoasemat
DEFAULT_STATION_ID = "100971"  # Helsinki Kaisaniemi
DEFAULT_YEAR = "2019"

KNOWN_STATIONS: dict[str, str] = {
    "100971": "Helsinki Kaisaniemi",
    "101004": "Helsinki Kumpula",
    "100968": "Vantaa Helsinki-Vantaan lentoasema",
    "101065": "Tampere Härmälä",
    "101932": "Sodankylä Tähtelä",
}
