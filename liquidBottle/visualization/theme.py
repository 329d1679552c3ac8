# -- Visualization Theme -- #

'''
Centralized dark-mode theme for the liquid bottle Plotly figures.

Change colors or template here to restyle every plot at once.

Sean Bowman [10/18/2026]
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Primary color palette (Material Design -- visible on dark backgrounds)
BLUE = '#42A5F5'
RED = '#EF5350'
GREEN = '#66BB6A'
ORANGE = '#FFA726'
PURPLE = '#AB47BC'
CYAN = '#26C6DA'

# Neutrals
WHITE = '#E0E0E0'
REFERENCE_LINE = '#888888'

# Bottle and liquid accents
CONTAINER_COLOR = WHITE
SURFACE_HIGHLIGHT = 'rgba(255,255,255,0.42)'
SURFACE_GLOW = 'rgba(255,255,255,0.75)'
DROPLET_FILL = 'rgba(210,240,255,0.92)'
DROPLET_HIGHLIGHT = 'rgba(255,255,255,0.85)'
