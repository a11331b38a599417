from exact_values.domain.monetary.currency import Currency


EUR = Currency("EUR", 2, "Euro", "€")
USD = Currency("USD", 2, "US Dollar", "$")
GBP = Currency("GBP", 2, "British Pound", "£")
JPY = Currency("JPY", 0, "Japanese Yen", "¥")
CHF = Currency("CHF", 2, "Swiss Franc")
SEK = Currency("SEK", 2, "Swedish Krona")
PLN = Currency("PLN", 2, "Polish Zloty", "zł")
CZK = Currency("CZK", 2, "Czech Koruna", "Kč")
BHD = Currency("BHD", 3, "Bahraini Dinar")

# Historical currencies, still found in old records
DEM = Currency("DEM", 2, "Deutsche Mark")
ATS = Currency("ATS", 2, "Austrian Schilling", "öS")

# Register all predefined currencies
for _currency in (EUR, USD, GBP, JPY, CHF, SEK, PLN, CZK, BHD, DEM, ATS):
    Currency.register(_currency, overwrite=True)
