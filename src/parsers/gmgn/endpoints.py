BASE_URL = "https://gmgn.ai"

# Holder analytics (vas API — same {"code", "msg", "data"} envelope)
TOKEN_HOLDER_STAT = "/vas/api/v1/token_holder_stat/{chain}/{address}"
TOKEN_HOLDERS = "/vas/api/v1/token_holders/{chain}/{address}"
