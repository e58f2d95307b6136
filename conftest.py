import spccodec.config

def pytest_configure(config):
    # Ignore any local configuration files, tests expect the defaults
    spccodec.config.config = spccodec.config.load_config(
        spccodec.config.default_cfg, [])
