class Label:
    ENVIRONMENT = 'navy.environment'
    SERVICE = 'navy.service'
    DEVELOP = 'navy.develop'
    VIRTUAL_HOST = 'navy.virtual_host'
