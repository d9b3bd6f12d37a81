"""Application settings -- loaded once at startup.

Uses pydantic-settings to read env vars (and .env for local dev).
Telnyx credentials are optional: without them SMS sends are skipped and
reported as not sent, never raised.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str = ""

    TELNYX_API_KEY: str = ""
    TELNYX_PHONE_NUMBER: str = ""
    TELNYX_API_URL: str = "https://api.telnyx.com/v2/messages"

    ZIP_LOOKUP_URL: str = "https://api.zippopotam.us/us"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Base URL used to build the PDF link texted to employees.
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    PDF_TEMPLATE_PATH: str = str(_BASE_DIR / "templates" / "i9-template.pdf")
    PDF_OUTPUT_DIR: str = str(_BASE_DIR / "output" / "pdfs")

    # Employer profile printed in Section 2 of the generated PDF.
    EMPLOYER_NAME: str = "Telnyx LLC"
    EMPLOYER_ADDRESS: str = "311 W Superior St, Suite 200"
    EMPLOYER_CITY: str = "Chicago"
    EMPLOYER_STATE: str = "IL"
    EMPLOYER_ZIP: str = "60654"
    HR_REPRESENTATIVE_NAME: str = "Sarah Johnson"
    HR_REPRESENTATIVE_TITLE: str = "HR Manager"
    HR_CONTACT_EMAIL: str = "hr@telnyx.com"

    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def employer_profile(self) -> dict:
        return {
            "company_name": self.EMPLOYER_NAME,
            "company_address": self.EMPLOYER_ADDRESS,
            "company_city": self.EMPLOYER_CITY,
            "company_state": self.EMPLOYER_STATE,
            "company_zip": self.EMPLOYER_ZIP,
            "hr_representative_name": self.HR_REPRESENTATIVE_NAME,
            "hr_representative_title": self.HR_REPRESENTATIVE_TITLE,
        }


settings = Settings()
