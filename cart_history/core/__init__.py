"""
Core domain models and operation results.

Не зависит от способа взаимодействия с пользователем (CLI, тесты и т.д.).
"""
