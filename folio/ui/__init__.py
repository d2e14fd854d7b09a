from folio.ui import input, keys, screen
