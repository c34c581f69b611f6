"""Components that each report one piece of system information as text."""