from typing import Any, Mapping

from app.models import UNKNOWN, UNKNOWN_LOCATION, LocationDescriptor
from app.services.fields import dig, text

# UN/LOCODE -> (city, country) for the ports the carrier feed reports most
LOCODE_CITIES = {
    "AEJEA": ("Jebel Ali", "United Arab Emirates"),
    "AEDXB": ("Dubai", "United Arab Emirates"),
    "BEANR": ("Antwerp", "Belgium"),
    "CNNGB": ("Ningbo", "China"),
    "CNSHA": ("Shanghai", "China"),
    "CNSZX": ("Shenzhen", "China"),
    "CNTAO": ("Qingdao", "China"),
    "CNYTN": ("Yantian", "China"),
    "DEBRV": ("Bremerhaven", "Germany"),
    "DEHAM": ("Hamburg", "Germany"),
    "DKAAR": ("Aarhus", "Denmark"),
    "EGPSD": ("Port Said", "Egypt"),
    "ESALG": ("Algeciras", "Spain"),
    "ESVLC": ("Valencia", "Spain"),
    "GBFXT": ("Felixstowe", "United Kingdom"),
    "HKHKG": ("Hong Kong", "Hong Kong"),
    "INNSA": ("Nhava Sheva", "India"),
    "INMUN": ("Mundra", "India"),
    "KRPUS": ("Busan", "South Korea"),
    "LKCMB": ("Colombo", "Sri Lanka"),
    "MAPTM": ("Tanger Med", "Morocco"),
    "MYPKG": ("Port Klang", "Malaysia"),
    "MYTPP": ("Tanjung Pelepas", "Malaysia"),
    "NLRTM": ("Rotterdam", "Netherlands"),
    "OMSLL": ("Salalah", "Oman"),
    "PKKHI": ("Karachi", "Pakistan"),
    "SADMM": ("Dammam", "Saudi Arabia"),
    "SAJED": ("Jeddah", "Saudi Arabia"),
    "SARUH": ("Riyadh", "Saudi Arabia"),
    "SGSIN": ("Singapore", "Singapore"),
    "TRAMR": ("Ambarli", "Turkey"),
    "USLAX": ("Los Angeles", "United States"),
    "USLGB": ("Long Beach", "United States"),
    "USNYC": ("New York", "United States"),
    "USSAV": ("Savannah", "United States"),
    "VNSGN": ("Ho Chi Minh City", "Vietnam"),
}


class LocationResolver:
    """
    Resolves where an event happened. Fixed priority:
    1) UN/LOCODE present in LOCODE_CITIES
    2) structured address city
    3) bare facility / terminal name
    4) the Unknown descriptor
    Never raises; every field of the result is populated.
    """

    @staticmethod
    def _location_blocks(record: Any) -> list:
        blocks = [
            dig(record, "eventLocation"),
            dig(record, "transportCall", "location"),
            dig(record, "transportCall"),
        ]
        return [b for b in blocks if isinstance(b, Mapping)]

    @staticmethod
    def resolve(record: Any) -> LocationDescriptor:
        blocks = LocationResolver._location_blocks(record)

        codes = [text(b.get("UNLocationCode")) for b in blocks]
        codes = [c.upper() for c in codes if c]
        source_code = codes[0] if codes else None

        country = UNKNOWN
        for block in blocks:
            country = text(dig(block, "address", "country")) or text(dig(block, "address", "countryCode")) or country
            if country != UNKNOWN:
                break

        # 1) Static code table wins over anything embedded in the record
        for code in codes:
            if code in LOCODE_CITIES:
                city, table_country = LOCODE_CITIES[code]
                return LocationDescriptor(name=city, city=city, country=table_country, code=code)

        # 2) Structured city
        for block in blocks:
            city = text(dig(block, "address", "city"))
            if city:
                return LocationDescriptor(name=city, city=city, country=country, code=source_code)

        # 3) Facility / terminal name
        for block in blocks:
            facility = text(block.get("locationName")) or text(block.get("facilityName"))
            if facility:
                return LocationDescriptor(name=facility, city=UNKNOWN, country=country, code=source_code)

        if source_code:
            return LocationDescriptor(code=source_code)
        return UNKNOWN_LOCATION
