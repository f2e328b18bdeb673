class GlobalMessages:
    # Auth Messages
    INVALID_CREDENTIALS = "Could not validate credentials. Please log in again."
    PROFILE_NOT_FOUND = "No profile exists for this account. Please complete registration."
    PROFILE_ALREADY_EXISTS = "A profile already exists for this account."
    INSUFFICIENT_PERMISSIONS = "You do not have permission to perform this action."

    # Store Messages
    STORE_UNAVAILABLE = "The service is temporarily unavailable. Please try again."

    # User Messages
    USER_NOT_FOUND = "User not found."
    ROLE_IMMUTABLE = "A user's role cannot be changed."

    # Doctor Messages
    DOCTOR_NOT_FOUND = "Doctor not found."

    # Appointment Messages
    APPOINTMENT_BOOKED = "Appointment booked successfully."
    APPOINTMENT_NOT_FOUND = "Appointment not found."
    APPOINTMENT_UPDATED = "Appointment status updated."
    APPOINTMENT_FINAL = "This appointment is already {status} and can no longer change."
    APPOINTMENT_INVALID_STATUS = "Appointments can only be moved to completed or cancelled."

    # Report Messages
    REPORT_CREATED = "Medical report created successfully."
    REPORT_UPDATED = "Medical report updated."
    REPORT_NOT_FOUND = "Medical report not found."
    PATIENT_NOT_FOUND = "Patient not found."

    # Notification Messages
    NOTIFICATION_NOT_FOUND = "Notification not found."

    # Folder / document Messages
    FOLDER_NOT_FOUND = "Folder not found."
    DOCUMENT_NOT_FOUND = "Document not found."
    FOLDER_ACCESS_DENIED = "You don't have access to this folder."
    FOLDER_PRIVACY_DENIED = "You don't have permission to change this folder's privacy."
    DOCUMENT_DELETE_DENIED = "You don't have permission to delete this document."
