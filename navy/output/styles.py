class Style:
    info = 'bold blue'
    mark = 'bold cyan'
    mark_neutral = 'bold'
    good = 'bold green'
    bad = 'bold red'
    suspicious = 'bold yellow'
    context = 'dim'
    regular = 'default'
    default_navy = 'blue'
