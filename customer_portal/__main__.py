"""Run the API with uvicorn: python -m customer_portal"""

import uvicorn

if __name__ == "__main__":
    uvicorn.run("customer_portal.api.main:app", host="0.0.0.0", port=8000)
