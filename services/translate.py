from services.scoring import RiskBand, BAND_LABELS, INCREASED, DECREASED, NO_CHANGE

DEFAULT_LANG = "zh"
SUPPORTED_LANGS = ("zh", "en")



def translate_band(band: RiskBand, lang: str) -> str:
    translations = {
        RiskBand.UNASSESSED: "未評估",
        RiskBand.LOW: "低風險",
        RiskBand.MEDIUM: "中風險",
        RiskBand.HIGH: "高風險",
        RiskBand.CRITICAL: "極高風險",
    }
    if lang == "zh":
        return translations[band]
    return BAND_LABELS[band]

def translate_direction(direction: str, lang: str) -> str:
    translations = {
        INCREASED: "上升",
        DECREASED: "下降",
        NO_CHANGE: "持平",
    }
    if lang == "zh":
        return translations.get(direction, direction)
    return direction
