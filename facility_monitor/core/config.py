from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Facility Monitor"
    timezone: str = "Europe/Madrid"

    # Storage
    data_dir: str = Field(default="data")
    accounts_file: str = "users.dat"
    sensors_file: str = "sensors.dat"
    data_suffix: str = ".dat"
    max_path_length: int = 256  # path buffer size, terminator included

    # Mandatory elevated account (id 10000)
    default_admin_nif: str = "00000000"
    default_admin_secret: str = "admin"

    # Persist add/update immediately instead of waiting for an explicit save
    autosave: bool = False

    # Seed for the sensor simulation; None = nondeterministic
    rng_seed: Optional[int] = None

    # Logging
    log_file: str = "facility_monitor.log"
    log_level: str = "INFO"


settings = Settings()
