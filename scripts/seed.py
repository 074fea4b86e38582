from studypro.core.config import settings
from studypro.core.logging import configure_logging
from studypro.main import bootstrap

def main():
    configure_logging(settings.log_level)
    bootstrap()
    print("Seeded admin:", settings.admin_email, "and default content rows")

if __name__ == "__main__":
    main()
