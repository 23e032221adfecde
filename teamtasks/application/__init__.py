"""
===============================================================================
APPLICATION LAYER
===============================================================================

Casos de uso (usecases/) y tareas de arranque (dev_seed_admin).
Los casos de uso se importan desde `usecases/` y sus subpaquetes.
===============================================================================
"""
