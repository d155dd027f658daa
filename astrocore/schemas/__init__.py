from .charts import (
    AspectOut,
    BigThreeOut,
    BodyOut,
    ElementsOut,
    HouseOut,
    LayoutEntryOut,
    LayoutPointIn,
    LayoutRequest,
    LayoutResponse,
    MetaOut,
    NatalRequest,
    NatalResponse,
    RisingOut,
    SynastryRequest,
    SynastryResponse,
)
