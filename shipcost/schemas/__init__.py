from shipcost.schemas.shipping import PriceRequest, PriceResponse, ConfigCheckRequest, ConfigCheckResponse
