"""Official Account actions for menus, messages and QR codes, and passive XML replies."""